"""Allow ``python -m youtube_tools`` to launch the CLI."""

from youtube_tools.cli.main import main

if __name__ == "__main__":  # pragma: no cover
    main()
