from skill_hub.cli import app

app()
