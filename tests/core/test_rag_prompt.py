"""Tests for the grounding prompt and context assembly."""

from pdf_rag.core.rag_query import INTERNAL_ERROR_MESSAGE, REFUSAL_MESSAGE, build_context, render_prompt


class TestRenderPrompt:
    """Test the fixed grounding template."""

    def test_context_and_question_placed(self) -> None:
        """Should place context under CONTEXT PROVIDED and the raw question under USER QUESTION."""
        prompt = render_prompt("Alpha fact.", "What is alpha?")

        assert prompt.startswith("CONTEXT PROVIDED:\nAlpha fact.\n\nCRITICAL INSTRUCTIONS:")
        assert "USER QUESTION:\nWhat is alpha?\n\nANSWER (based only on the provided context):" in prompt
        assert prompt.endswith("ANSWER (based only on the provided context):")

    def test_refusal_sentence_prescribed(self) -> None:
        """Should instruct the model to use the exact refusal sentence."""
        prompt = render_prompt("ctx", "q")

        assert f'"{REFUSAL_MESSAGE}"' in prompt
        assert "EXAMPLES OF CORRECT ANSWERS FOR QUESTIONS WITHOUT CONTEXT:" in prompt

    def test_braces_in_inputs_kept_verbatim(self) -> None:
        """Should not treat braces in user text as template fields."""
        prompt = render_prompt("json {\"a\": 1}", "what is {a}?")

        assert "json {\"a\": 1}" in prompt
        assert "what is {a}?" in prompt

    def test_fixed_messages(self) -> None:
        """Should keep the user-visible constants stable."""
        assert REFUSAL_MESSAGE == "I don't have the information necessary to answer your question."
        assert INTERNAL_ERROR_MESSAGE == (
            "Internal error: Unable to process your query. "
            "Please check if ingestion has been performed."
        )


class TestBuildContext:
    """Test context assembly and the optional budget."""

    def test_joined_with_blank_line_in_order(self) -> None:
        """Should keep retrieval order and not deduplicate."""
        assert build_context(["b", "a", "b"]) == "b\n\na\n\nb"

    def test_unbounded_by_default(self) -> None:
        """Should include every chunk without a budget."""
        contents = ["x" * 5000, "y" * 5000]

        assert len(build_context(contents)) == 10002

    def test_budget_keeps_whole_chunks(self) -> None:
        """Should add whole chunks while they fit."""
        assert build_context(["aaaa", "bbbb", "cccc"], max_chars=10) == "aaaa\n\nbbbb"

    def test_oversized_first_chunk_truncated(self) -> None:
        """Should cut the first chunk to the budget rather than return nothing."""
        assert build_context(["abcdefghij", "k"], max_chars=4) == "abcd"
