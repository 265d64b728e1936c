import os

from pydantic import BaseModel


class Settings(BaseModel):
    # Report output
    REPORT_OUTPUT: str = os.getenv("REPORT_OUTPUT", "analyze.html")
    REPORT_TITLE: str = os.getenv("REPORT_TITLE", "Cpx Code Analysis Report")

    # Optional Jinja2 template overriding the built-in one
    REPORT_TEMPLATE: str | None = os.getenv("REPORT_TEMPLATE")

    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")


settings = Settings()
