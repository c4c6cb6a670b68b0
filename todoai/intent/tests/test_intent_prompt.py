import unittest

from todoai.intent.intent_prompt import build_intent_prompt


class TestBuildIntentPrompt(unittest.TestCase):
    def test_user_request_is_embedded_quoted(self):
        prompt = build_intent_prompt("delete last task")
        self.assertIn('User request: "delete last task"', prompt)

    def test_quotes_in_user_request_are_escaped(self):
        prompt = build_intent_prompt('say "hi" to mom')
        self.assertIn('User request: "say \\"hi\\" to mom"', prompt)

    def test_worked_examples_present(self):
        prompt = build_intent_prompt("anything")
        self.assertIn('"delete last task" => {"intent":"delete","position":-1}', prompt)
        self.assertIn('{"intent":"update","task":"read book","newTask":"read novel"}', prompt)
        self.assertNotIn("USER_REQUEST_PLACEHOLDER", prompt)


if __name__ == '__main__':
    unittest.main()
