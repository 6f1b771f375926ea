"""Tokenize an arithmetic expression with a Scanner."""

from rastro import Scanner

TOKENS = [
    ("NUMBER", r"\d+(?:\.\d+)?"),
    ("NAME", r"[A-Za-z_]\w*"),
    ("OP", r"[-+*/()]"),
]

s = Scanner("rate * (base + 2.5)")
s.scan(r"\s*")
while s.rest:
    loc = s.location
    for kind, pattern in TOKENS:
        if (text := s.scan(pattern)) is not None:
            print(f"{loc}  {kind:<6} {text}")
            break
    else:
        raise SystemExit(f"{loc}: unexpected {s.peek(1)!r}")
    s.scan(r"\s*")
