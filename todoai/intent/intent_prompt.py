"""
Instruction prompt that asks the model to classify a todo request.

PROMPT> python -m todoai.intent.intent_prompt
"""
import json

INTENT_PROMPT_TEMPLATE = """
You are a todo list assistant. Analyze the user request and determine the intent and required parameters.

User request: USER_REQUEST_PLACEHOLDER

Possible intents:
- create: Add a new task
- read: List all tasks
- update: Modify a task (mark as done/undone or update text)
- delete: Remove a task

Return a JSON response with only the fields needed for the operation. Follow these rules:

For CREATE:
{
  "intent": "create",
  "task": "task description"
}

For READ:
{
  "intent": "read"
}

For UPDATE:
{
  "intent": "update",
  "id": number,           // if known
  "position": number,     // if using position (1st, 2nd, last, etc.)
  "task": "partial text", // if identifying by text
  "newTask": string,      // if renaming task
  "done": boolean         // if changing status
}

For DELETE:
{
  "intent": "delete",
  "id": number,           // if known
  "position": number,     // if using position (1st, 2nd, last, etc.)
  "task": "partial text"  // if identifying by text
}

Special cases:
- "delete last task" => {"intent":"delete","position":-1}
- "update first to done" => {"intent":"update","position":1,"done":true}
- "change 'read book' to 'read novel'" => {"intent":"update","task":"read book","newTask":"read novel"}
- "mark task 3 as not done" => {"intent":"update","id":3,"done":false}

Only return the JSON object, no additional text or explanation.
"""


def build_intent_prompt(user_request: str) -> str:
    """Embed the user's text, JSON-quoted so it cannot close the surrounding quotes."""
    quoted = json.dumps(user_request, ensure_ascii=False)
    return INTENT_PROMPT_TEMPLATE.replace("USER_REQUEST_PLACEHOLDER", quoted).strip()


if __name__ == "__main__":
    print(build_intent_prompt("delete the task about milk"))
