from castaway.cli import app

app()
