"""Allow ``python -m namesafe``."""
from namesafe.cli import main

main()
