# olastretch/__main__.py

from olastretch.cli.main import cli

if __name__ == "__main__":
    cli()
