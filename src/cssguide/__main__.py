from cssguide.cli.main import cli

cli()
