"""
Built-in wallshow subcommands. Every module in this package defines a click command named "cli",
which wallshow.cli_utils.utils.import_commands() collects and attaches to the main group.
"""
