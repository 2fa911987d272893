# Path: protonctl/tests/__init__.py
