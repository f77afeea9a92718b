"""optspec command line: check and summary subcommands."""
