"""
Remove the markdown code fence that models like to wrap JSON answers in.

PROMPT> python -m todoai.llm_util.json_fence
"""
import re

_LEADING_FENCE = re.compile(r"^```json\s*")
_TRAILING_FENCE = re.compile(r"```$")


def strip_json_fence(text: str) -> str:
    """
    Strip an optional leading ```json marker and trailing ``` marker.

    Text without fences is only trimmed, so a fenced answer and the same
    answer unfenced end up identical.
    """
    cleaned = text.strip()
    cleaned = _LEADING_FENCE.sub("", cleaned)
    cleaned = _TRAILING_FENCE.sub("", cleaned)
    return cleaned.strip()


if __name__ == "__main__":
    sample = '```json\n{"intent": "read"}\n```'
    print(f"before: {sample!r}")
    print(f"after: {strip_json_fence(sample)!r}")
