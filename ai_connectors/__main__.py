"""Allow ``python -m ai_connectors``."""

from ai_connectors.cli.cli import main

if __name__ == "__main__":
    main()
