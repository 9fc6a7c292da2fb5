"""Entry point for ``python -m identscan``."""

from identscan.cli.main import cli

if __name__ == "__main__":
    cli(prog_name="identscan")
