"""Allow ``python -m utf8codec``."""

from utf8codec.cli import main

main()
