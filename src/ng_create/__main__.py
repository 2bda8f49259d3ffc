from .cli import PROG_NAME, app

app(prog_name=PROG_NAME)
