"""Allow ``python -m gcauto`` to run the command line interface."""

from gcauto.cli import main


if __name__ == "__main__":
    main(prog_name="gcauto")
