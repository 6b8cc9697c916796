"""Entry point: `flask --app wsgi run` or `python wsgi.py`."""

from src.kpi_system.kpi_system.main import create_app

app = create_app()

if __name__ == "__main__":
    app.run(debug=bool(app.config.get("DEBUG", False)))
