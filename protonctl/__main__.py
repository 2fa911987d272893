# Path: protonctl/__main__.py
from protonctl.main import run

run()
