"""
An LLM with predefined responses, to be used for testing the intent resolver.

PROMPT> python -m todoai.llm_util.response_mockllm
"""
import itertools
from typing import Any

from llama_index.core.llms import CompletionResponse, MockLLM
from llama_index.core.llms.callbacks import llm_completion_callback


class ResponseMockLLM(MockLLM):
    """
    Cycles through the predefined responses, one per completion.
    Every prompt it receives is kept in `prompts`, so tests can inspect what was sent.
    """
    def __init__(self, responses: list[str], **kwargs):
        responses = responses or ['{"intent": "read"}']
        max_tokens = max(len(response) for response in responses)
        super().__init__(max_tokens=max_tokens, **kwargs)
        object.__setattr__(self, 'responses', responses)
        object.__setattr__(self, 'response_cycle', itertools.cycle(responses))
        object.__setattr__(self, 'prompts', [])

    def raise_exception_if_needed(self, response_text: str) -> None:
        """
        If the response starts with "raise:message", then raise an exception with the message.
        """
        if response_text.startswith("raise:"):
            raise RuntimeError(response_text.split(":", 1)[1])

    @llm_completion_callback()
    def complete(self, prompt: str, formatted: bool = False, **kwargs: Any) -> CompletionResponse:
        self.prompts.append(prompt)
        response_text = next(self.response_cycle)
        self.raise_exception_if_needed(response_text)
        return CompletionResponse(text=response_text)


if __name__ == "__main__":
    llm = ResponseMockLLM(
        responses=['{"intent": "read"}', '```json\n{"intent": "delete", "position": -1}\n```']
    )
    print(f"response1:\n{llm.complete('show my tasks').text}")
    print(f"response2:\n{llm.complete('delete last task').text}")
