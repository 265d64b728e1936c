from typing import Literal

from pydantic import BaseModel, model_validator


class RawToolCapture(BaseModel):
    """Raw output of one analyzer run, as captured by whoever ran the tool."""

    tool: str
    status: Literal["success", "error", "skipped"] = "success"

    # primary output channel (XML file / stdout) and the diagnostic channel (stderr)
    output: str = ""
    diagnostics: str = ""

    error: str | None = None


class CaptureBundle(BaseModel):
    captures: list[RawToolCapture] = []

    @model_validator(mode="before")
    @classmethod
    def _accept_bare_list(cls, data):
        # a bundle file may be just the list of captures
        if isinstance(data, list):
            return {"captures": data}
        return data
