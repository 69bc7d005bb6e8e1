"""Test merge-function call detection and balanced argument extraction."""

from classprism.calls import find_calls


class TestFindCalls:
    def test_simple_call(self, comments):
        src = 'cn("p-2")'
        (call,) = find_calls(src, comments(src))
        assert call.name == "cn"
        assert call.args == '"p-2"'
        assert call.call_start == 0
        assert call.args_start == 3
        assert call.call_end == len(src)

    def test_all_recognized_names(self, comments):
        src = 'cn("a") clsx("b") classnames("c")'
        assert [c.name for c in find_calls(src, comments(src))] == ["cn", "clsx", "classnames"]

    def test_whitespace_before_paren(self, comments):
        src = 'clsx  ("a")'
        (call,) = find_calls(src, comments(src))
        assert call.args == '"a"'

    def test_unrecognized_name(self, comments):
        src = 'twMerge("a") scn("b")'
        assert find_calls(src, comments(src)) == []

    def test_nested_parens(self, comments):
        src = 'cn("a", f(x, g(y)), "b") rest'
        (call,) = find_calls(src, comments(src))
        assert call.args == '"a", f(x, g(y)), "b"'
        assert src[call.call_end :] == " rest"

    def test_paren_inside_string(self, comments):
        src = 'cn("a)", "b")'
        (call,) = find_calls(src, comments(src))
        assert call.args == '"a)", "b"'

    def test_paren_inside_template(self, comments):
        src = "cn(`a ${f(x)} )`, 'b')"
        (call,) = find_calls(src, comments(src))
        assert call.args == "`a ${f(x)} )`, 'b'"

    def test_escaped_quote_in_argument(self, comments):
        src = 'cn("a \\") b", "c")'
        (call,) = find_calls(src, comments(src))
        assert call.args == '"a \\") b", "c"'

    def test_paren_inside_comment(self, comments):
        src = 'cn("a", // )\n "b")'
        (call,) = find_calls(src, comments(src))
        assert call.args == '"a", // )\n "b"'

    def test_call_inside_comment_is_skipped(self, comments):
        src = '// cn("a")\ncn("b")'
        (call,) = find_calls(src, comments(src))
        assert call.args == '"b"'

    def test_unterminated_call_is_dropped(self, comments):
        src = 'cn("a", "b"'
        assert find_calls(src, comments(src)) == []

    def test_scanning_continues_after_unterminated(self, comments):
        src = 'cn("a" ; clsx("b")'
        calls = find_calls(src, comments(src))
        assert [c.name for c in calls] == ["clsx"]

    def test_nested_recognized_calls(self, comments):
        src = 'cn("a", clsx("b"))'
        calls = find_calls(src, comments(src))
        assert [c.name for c in calls] == ["cn", "clsx"]
        assert calls[1].args == '"b"'


class TestContains:
    def test_bounds_inclusive(self, comments):
        src = 'x cn("a") y'
        (call,) = find_calls(src, comments(src))
        assert call.contains(2)
        assert call.contains(call.call_end)
        assert not call.contains(1)
        assert not call.contains(call.call_end + 1)
