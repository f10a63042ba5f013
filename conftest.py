pytest_plugins = ["startrack.testing.conftest"]
