from sunshine.cli.main import app

app()
