"""Run the gate pass API: `python app.py` (settings picked by APP_ENV)."""
from src.gatepass_system.gatepass_system.main import create_app, load_settings

settings = load_settings()
app = create_app(settings=settings)


if __name__ == "__main__":
    app.run(
        host=getattr(settings, "HOST", "127.0.0.1"),
        port=int(getattr(settings, "PORT", 3000)),
        debug=bool(getattr(settings, "DEBUG", False)),
    )
