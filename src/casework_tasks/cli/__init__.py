"""Command line interface for Casework Tasks."""


def main() -> None:
    """Entry point for the casework CLI."""
    from casework_tasks.cli.app import create_app

    app = create_app()
    app()


if __name__ == "__main__":
    main()
