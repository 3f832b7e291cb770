"""Severity-tagged progress lines on stdout.

    [I]      Categoria:Utenti dall'Italia    +Foo
"""

INFO  = "I"
WARN  = "W"
ERROR = "E"


def logit(level, msg):
    print(f"[{level}] \t {msg}", flush=True)
