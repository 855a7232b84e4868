import os

from dotenv import load_dotenv

load_dotenv()

BASE_DIR = os.path.abspath(os.path.join(os.path.dirname(__file__), os.pardir))


class Config:
    # SQLite DB file in the project folder unless DATABASE_URL is set
    SQLALCHEMY_DATABASE_URI = os.environ.get(
        "DATABASE_URL", f"sqlite:///{os.path.join(BASE_DIR, 'app.db')}"
    )
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    SECRET_KEY = os.environ.get("SECRET_KEY", "dev-secret-key-change-later")

    LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO")

    # Live feed timings
    FEED_INTERVAL_SECONDS = float(os.environ.get("FEED_INTERVAL_SECONDS", 2))
    HOURLY_FEED_INTERVAL_SECONDS = float(
        os.environ.get("HOURLY_FEED_INTERVAL_SECONDS", 300)
    )
    FEED_RETRY_MS = int(os.environ.get("FEED_RETRY_MS", 3000))

    STATUS_SWEEP_INTERVAL_SECONDS = float(
        os.environ.get("STATUS_SWEEP_INTERVAL_SECONDS", 60)
    )


class TestConfig(Config):
    TESTING = True
    SQLALCHEMY_DATABASE_URI = "sqlite://"
    SECRET_KEY = "test-secret-key"
    LOG_LEVEL = "DEBUG"
    FEED_INTERVAL_SECONDS = 0.01
    HOURLY_FEED_INTERVAL_SECONDS = 0.01
    FEED_RETRY_MS = 1000
