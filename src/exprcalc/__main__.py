from exprcalc.cli import app

app(prog_name="exprcalc")
