"""Allow ``python -m aspectdemo``."""

from aspectdemo.cli.main import main

main()
