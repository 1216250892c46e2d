"""mm subcommands."""
