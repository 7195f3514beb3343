import pytest

from planswitch.prompt import SelectionPrompter, build_choices


def scripted(*answers):
    """Return an input function that replays answers, then raises EOFError."""
    queue = list(answers)

    def _input(prompt):
        if not queue:
            raise EOFError
        answer = queue.pop(0)
        if isinstance(answer, BaseException):
            raise answer
        return answer

    return _input


class TestBuildChoices:
    """Tests for the selection list labels."""

    def test_order_and_current(self):
        choices = build_choices("pro")
        assert [pid for pid, _ in choices] == ["oss", "premium", "pro", "advanced"]
        labels = dict(choices)
        assert labels["pro"].endswith("(current)")
        assert "(current)" not in labels["premium"]

    def test_pending_suffix(self):
        labels = dict(build_choices("advanced", "3 days"))
        assert labels["advanced"].endswith("(current) for 3 more days")

    def test_unknown_current_marks_oss(self):
        labels = dict(build_choices("legacy"))
        assert "(current)" in labels["oss"]

    def test_prices_in_labels(self):
        labels = dict(build_choices("oss"))
        assert labels["oss"].startswith("OSS FREE")
        assert labels["advanced"] == "Advanced $200"


class TestSelectionPrompter:
    """Tests for SelectionPrompter."""

    @pytest.fixture
    def output(self):
        return []

    def test_select_by_number(self, output):
        prompter = SelectionPrompter(input_fn=scripted("2"), output_fn=output.append)
        assert prompter.select("Pick", "oss") == "premium"
        assert output[0] == "Pick"
        assert len(output) == 5

    def test_select_by_id(self, output):
        prompter = SelectionPrompter(input_fn=scripted("advanced"), output_fn=output.append)
        assert prompter.select("Pick", "oss") == "advanced"

    def test_invalid_then_valid(self, output):
        prompter = SelectionPrompter(input_fn=scripted("9", "²", "enterprise", "3"), output_fn=output.append)
        assert prompter.select("Pick", "oss") == "pro"
        assert sum("Please enter a number" in line for line in output) == 3

    @pytest.mark.parametrize("answers", [("",), (), (KeyboardInterrupt(),)])
    def test_abort_returns_none(self, output, answers):
        prompter = SelectionPrompter(input_fn=scripted(*answers), output_fn=output.append)
        assert prompter.select("Pick", "pro") is None
