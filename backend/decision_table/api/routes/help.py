"""
Static usage description
"""
from fastapi import APIRouter
from fastapi.responses import PlainTextResponse

router = APIRouter(tags=["help"])

HELP_TEXT = """\
POST /compute with a JSON object. All fields are optional:

  a, b, c   boolean
  d         number
  e, f      integer (32-bit signed)
  ruleSet   "Base" (default), "Variant1" or "Variant2"
            (legacy: field "case" with "B", "C1" or "C2")

Example: {"a": true, "b": true, "c": true, "d": 3.7, "e": 5, "f": 2, "ruleSet": "Variant1"}

Response: {"h": "M" | "P" | "T", "k": <number>}
Errors:   {"code": 400, "message": ...} when the a/b/c combination is not
          supported or a value required by the matching rule is missing.
"""


@router.get("/help", response_class=PlainTextResponse)
async def help_text():
    """Describe the expected parameters"""
    return HELP_TEXT
