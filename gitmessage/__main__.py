from gitmessage.cli import app

app(prog_name="gitmessage")
