"""Allow ``python -m wireglyph``."""
from wireglyph.cli import cli

if __name__ == "__main__":
    cli()
