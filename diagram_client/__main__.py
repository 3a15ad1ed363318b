from diagram_client.cli import app

app()
