"""
Tests for translator/prompts.py - Prompt construction.
"""
from translator.prompts import SYSTEM_PROMPT, build_payload, build_user_query


class TestBuildUserQuery:
    """Tests for build_user_query."""

    def test_embeds_languages_and_code(self):
        query = build_user_query("print('hi')", "Python", "Go")
        assert query == "Convert the following Python code into Go: \n\n```Python\nprint('hi')\n```"

    def test_multiline_code_kept_verbatim(self):
        code = "def f():\n    return 1\n"
        assert code in build_user_query(code, "Python", "Rust")


class TestBuildPayload:
    """Tests for build_payload."""

    def test_structure(self):
        payload = build_payload("x", "Python", "Java", temperature=0.2)

        assert payload["contents"] == [
            {"role": "user", "parts": [{"text": build_user_query("x", "Python", "Java")}]}
        ]
        assert payload["systemInstruction"] == {"parts": [{"text": SYSTEM_PROMPT}]}
        assert payload["generationConfig"] == {"temperature": 0.2}

    def test_default_temperature_low(self):
        assert build_payload("x", "Python", "Java")["generationConfig"]["temperature"] == 0.1

    def test_system_prompt_forbids_prose_and_fences(self):
        assert "ONLY output the code block" in SYSTEM_PROMPT
        assert "markdown fences" in SYSTEM_PROMPT
