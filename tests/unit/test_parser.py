"""
Unit tests for the Makefile parser.
"""

import random

import pytest

from makefmt.models import (
    AssignmentNode,
    BannerCommentNode,
    BlankLineNode,
    CommentNode,
    ConditionalNode,
    DirectiveNode,
    IncludeNode,
    NodeType,
    RawNode,
    RecipeNode,
    RuleNode,
    SectionHeaderNode,
)
from makefmt.parser import (
    has_continuation,
    is_banner_comment,
    join_continuations,
    parse,
    parse_assignment,
    split_lines,
)


def parse_one(text):
    nodes = parse(text)
    assert len(nodes) == 1, f"expected 1 node, got {nodes!r}"
    return nodes[0]


class TestParseBasics:
    """Test cases for empty and blank input."""

    def test_empty_input(self):
        """Test that empty input produces no nodes."""
        assert parse("") == []

    def test_blank_only(self):
        """Test that blank lines become blank line nodes."""
        nodes = parse("\n\n\n")
        assert len(nodes) == 3
        assert all(isinstance(n, BlankLineNode) for n in nodes)

    def test_whitespace_line_is_blank(self):
        """Test that a whitespace-only line is blank but keeps its raw text."""
        node = parse_one(" \t ")
        assert node.type == NodeType.BLANK_LINE
        assert node.raw == " \t "

    def test_line_numbers(self):
        """Test that nodes record their 1-indexed source line."""
        nodes = parse("# comment\nVAR := val\n\nbuild:\n\t@echo hi")

        assert [(n.line, n.type) for n in nodes] == [
            (1, NodeType.COMMENT),
            (2, NodeType.ASSIGNMENT),
            (3, NodeType.BLANK_LINE),
            (4, NodeType.RULE),
        ]
        assert len(nodes[3].children) == 1
        assert nodes[3].children[0].line == 5


class TestClassifyComments:
    """Test cases for comment, section header and banner classification."""

    @pytest.mark.parametrize("text,prefix,body", [
        ("# This is a comment", "#", "This is a comment"),
        ("## Go Variables", "##", "Go Variables"),
        ("#", "#", ""),
        ("#no space", "#", "no space"),
    ])
    def test_comment(self, text, prefix, body):
        """Test comment prefix and text extraction."""
        node = parse_one(text)
        assert isinstance(node, CommentNode)
        assert node.prefix == prefix
        assert node.text == body

    def test_section_header(self):
        """Test that ##@ lines are section headers."""
        node = parse_one("##@ Development")
        assert isinstance(node, SectionHeaderNode)
        assert node.text == "Development"
        assert node.prefix == "##@"

    @pytest.mark.parametrize("text", [
        "###############",
        "##",
        "# =============================================================================",
        "# -----",
        "## Self-Documenting Makefile Help                                     ##",
    ])
    def test_banner(self, text):
        """Test decorative separator detection."""
        node = parse_one(text)
        assert isinstance(node, BannerCommentNode)
        assert node.text == text

    def test_single_hash_is_not_banner(self):
        """Test that a lone # is an ordinary comment."""
        assert not is_banner_comment("#")
        assert parse_one("#").type == NodeType.COMMENT

    def test_section_header_wins_over_banner(self):
        """Test that ##@ is checked before the banner shapes."""
        assert parse_one("##@ ##").type == NodeType.SECTION_HEADER


class TestClassifyAssignments:
    """Test cases for variable assignments."""

    @pytest.mark.parametrize("text,name,op,value", [
        ("VAR = value", "VAR", "=", "value"),
        ("VAR := value", "VAR", ":=", "value"),
        ("VAR ::= value", "VAR", "::=", "value"),
        ("VAR ?= value", "VAR", "?=", "value"),
        ("VAR += value", "VAR", "+=", "value"),
        ("VAR != value", "VAR", "!=", "value"),
        ("VAR:=value", "VAR", ":=", "value"),
        ("GO?=go", "GO", "?=", "go"),
        ("GO_PACKAGE := github.com/$(PROJECT_OWNER)/$(PROJECT_NAME)",
         "GO_PACKAGE", ":=", "github.com/$(PROJECT_OWNER)/$(PROJECT_NAME)"),
        ("VAR =", "VAR", "=", ""),
        ("URL := http://x?a=b", "URL", ":=", "http://x?a=b"),
        ("  INDENTED := 1", "INDENTED", ":=", "1"),
    ])
    def test_assignment(self, text, name, op, value):
        """Test operator detection and name/value extraction."""
        node = parse_one(text)
        assert isinstance(node, AssignmentNode)
        assert node.var_name == name
        assert node.assign_op == op
        assert node.var_value == value
        assert node.raw == text

    def test_override_line_is_directive(self):
        """Test that override lines are directives, not assignments."""
        assert parse_one("override CFLAGS += -O2").type == NodeType.DIRECTIVE

    def test_name_with_spaces_is_not_assignment(self):
        """Test that multi-word left-hand sides are rejected."""
        assert parse_one("foo bar = baz").type != NodeType.ASSIGNMENT

    def test_rule_with_equals_in_help_is_not_assignment(self):
        """Test that an '=' after a rule colon does not make an assignment."""
        node = parse_one("release: ## Create release (use with TAG=v1.0.0)")
        assert node.type != NodeType.ASSIGNMENT

    @pytest.mark.parametrize("text", [
        "else=1",
        "endif:=x",
        "ifdef+=y",
        "include=a.mk",
        "export=1",
        ".PHONY=x",
        "define=1",
    ])
    def test_keyword_names_are_not_assignments(self, text):
        """Test that keywords are never used as variable names."""
        node = parse_one(text)
        assert node.type == NodeType.RAW
        assert node.raw == text

    def test_parse_assignment(self):
        """Test classifying a single line as an assignment."""
        node = parse_assignment("  CC ?= gcc")

        assert node.var_name == "CC"
        assert node.assign_op == "?="
        assert node.var_value == "gcc"
        assert parse_assignment("all: build") is None
        assert parse_assignment("else=1") is None

    def test_continuation_assignment(self):
        """Test that continued lines are joined but raw keeps the original text."""
        text = "VAR = one \\\ntwo \\\nthree"
        node = parse_one(text)
        assert isinstance(node, AssignmentNode)
        assert node.raw == text
        assert node.var_value.split() == ["one", "two", "three"]


class TestClassifyRules:
    """Test cases for rules and recipes."""

    @pytest.mark.parametrize("text,targets,prereqs,help_text", [
        ("build:", ["build"], [], ""),
        ("build: main.go utils.go", ["build"], ["main.go", "utils.go"], ""),
        ("build: ## Build the binary", ["build"], [], "Build the binary"),
        ("ci: lint test build ## Run CI pipeline", ["ci"], ["lint", "test", "build"], "Run CI pipeline"),
        ("log-%:", ["log-%"], [], ""),
        ("%:", ["%"], [], ""),
        ("a b: c", ["a", "b"], ["c"], ""),
    ])
    def test_rule(self, text, targets, prereqs, help_text):
        """Test target, prerequisite and inline help extraction."""
        node = parse_one(text)
        assert isinstance(node, RuleNode)
        assert node.targets == targets
        assert node.prerequisites == prereqs
        assert node.inline_help == help_text

    def test_order_only_prerequisites(self):
        """Test that prerequisites after | are order-only."""
        node = parse_one("obj/a.o: a.c | obj")
        assert node.prerequisites == ["a.c"]
        assert node.order_only == ["obj"]

    def test_recipes_attach_to_rule(self):
        """Test that tab-led lines after a rule become its children."""
        nodes = parse("build:\n\t@echo hello\n\t@echo world")
        assert len(nodes) == 1
        rule = nodes[0]
        assert [type(c) for c in rule.children] == [RecipeNode, RecipeNode]
        assert rule.children[0].text == "@echo hello"

    def test_recipe_after_comment_attaches_to_rule(self):
        """Test that comments between a rule and its recipe do not detach the recipe."""
        nodes = parse("build:\n# note\n\t@echo hi\n")
        assert [n.type for n in nodes] == [NodeType.RULE, NodeType.COMMENT]
        assert len(nodes[0].children) == 1

    def test_blank_line_ends_recipe(self):
        """Test that a tab-led line after a blank line is not a recipe."""
        nodes = parse("build:\n\t@echo a\n\n\t@echo b\n")
        assert len(nodes[0].children) == 1
        assert nodes[-1].type == NodeType.RAW
        assert nodes[-1].raw == "\t@echo b"

    def test_tab_line_without_rule_is_raw(self):
        """Test that an orphan tab-led line is kept as raw text."""
        node = parse_one("\t@echo orphan")
        assert isinstance(node, RawNode)
        assert node.raw == "\t@echo orphan"

    def test_recipe_continuation(self):
        """Test that a continued recipe line is one child spanning two lines."""
        text = "log-%:\n\t@grep x | \\\n\t\tawk '{print}'"
        rule = parse_one(text)
        assert len(rule.children) == 1
        assert rule.children[0].raw == "\t@grep x | \\\n\t\tawk '{print}'"


class TestClassifyOther:
    """Test cases for conditionals, includes, directives and define blocks."""

    @pytest.mark.parametrize("text,directive,condition", [
        ("ifeq ($(OS),Windows_NT)", "ifeq", "($(OS),Windows_NT)"),
        ("ifneq ($(CC),gcc)", "ifneq", "($(CC),gcc)"),
        ("ifdef DEBUG", "ifdef", "DEBUG"),
        ("ifndef CC", "ifndef", "CC"),
        ("else", "else", ""),
        ("endif", "endif", ""),
        ("  endif", "endif", ""),
    ])
    def test_conditional(self, text, directive, condition):
        """Test conditional directive and condition extraction."""
        node = parse_one(text)
        assert isinstance(node, ConditionalNode)
        assert node.directive == directive
        assert node.condition == condition

    @pytest.mark.parametrize("text,include_type,paths", [
        ("include foo.mk bar.mk", "include", ["foo.mk", "bar.mk"]),
        ("-include optional.mk", "-include", ["optional.mk"]),
        ("sinclude optional.mk", "sinclude", ["optional.mk"]),
    ])
    def test_include(self, text, include_type, paths):
        """Test include kind and path extraction."""
        node = parse_one(text)
        assert isinstance(node, IncludeNode)
        assert node.include_type == include_type
        assert node.paths == paths

    @pytest.mark.parametrize("text", [
        ".PHONY: build test",
        "export PATH",
        "unexport SECRET",
        ".DEFAULT_GOAL := help",
        "vpath %.c src",
    ])
    def test_directive(self, text):
        """Test that directives win over assignments and rules."""
        node = parse_one(text)
        assert isinstance(node, DirectiveNode)
        assert node.text == text

    def test_define_block(self):
        """Test that a define block is one raw node holding every line."""
        text = "define MY_FUNC\n\t@echo hello\n\t@echo world\nendef"
        node = parse_one(text)
        assert isinstance(node, RawNode)
        assert node.raw == text

    def test_define_block_followed_by_content(self):
        """Test that parsing resumes normally after endef."""
        nodes = parse("define X\nA = 1\nendef\nB := 2\n")
        assert [n.type for n in nodes] == [NodeType.RAW, NodeType.ASSIGNMENT]
        assert nodes[1].line == 4

    def test_unterminated_define(self):
        """Test that an unterminated define swallows the rest of the file."""
        node = parse_one("define X\nA = 1\nB = 2\n")
        assert node.raw == "define X\nA = 1\nB = 2"

    def test_unclassifiable_line_is_raw(self):
        """Test that unrecognized content is kept verbatim."""
        node = parse_one("$(error boom)")
        assert isinstance(node, RawNode)
        assert node.raw == "$(error boom)"


class TestLineHelpers:
    """Test cases for line splitting and continuation joining."""

    @pytest.mark.parametrize("text,expected", [
        ("", []),
        ("a", ["a"]),
        ("a\n", ["a"]),
        ("a\nb\n", ["a", "b"]),
        ("a\n\n", ["a", ""]),
    ])
    def test_split_lines(self, text, expected):
        """Test that only the empty piece after a final newline is dropped."""
        assert split_lines(text) == expected

    def test_has_continuation_ignores_trailing_blanks(self):
        """Test that blanks after the backslash still count as a continuation."""
        assert has_continuation("a \\  ")
        assert not has_continuation("a")

    def test_join_continuations(self):
        """Test joined text and consumed line count."""
        lines = ["A = 1 \\", "  2 \\", "  3", "B = 4"]
        joined, count = join_continuations(lines, 0)
        assert count == 3
        assert joined.split() == ["A", "=", "1", "2", "3"]
        assert join_continuations(lines, 3) == ("B = 4", 1)

    def test_continuation_at_end_of_input(self):
        """Test that a trailing backslash on the last line does not overrun."""
        joined, count = join_continuations(["A = 1 \\"], 0)
        assert count == 1
        assert joined == "A = 1 "


class TestParseExampleMakefile:
    """Test cases for realistic input."""

    EXAMPLE = (
        "# Project Variables\n"
        "\n"
        "PROJECT_NAME := my-project\n"
        "PROJECT_OWNER := donaldgifford\n"
        "\n"
        "###############\n"
        "##@ Development\n"
        "\n"
        ".PHONY: build test\n"
        "\n"
        "build: ## Build the binary\n"
        "\t@ $(MAKE) --no-print-directory log-$@\n"
        "\t@mkdir -p $(BIN_DIR)\n"
        "\n"
        "test: ## Run tests\n"
        "\t@go test -v -race ./...\n"
        "\n"
        "ifeq ($(OS),Windows_NT)\n"
        "CC = cl\n"
        "else\n"
        "CC = gcc\n"
        "endif\n"
    )

    def test_node_kinds_present(self):
        """Test that every expected node kind is recognized."""
        nodes = parse(self.EXAMPLE)
        kinds = [n.type for n in nodes]

        assert kinds.count(NodeType.COMMENT) == 1
        assert kinds.count(NodeType.ASSIGNMENT) == 4
        assert kinds.count(NodeType.BANNER_COMMENT) == 1
        assert kinds.count(NodeType.SECTION_HEADER) == 1
        assert kinds.count(NodeType.DIRECTIVE) == 1
        assert kinds.count(NodeType.RULE) == 2
        assert kinds.count(NodeType.CONDITIONAL) == 3
        assert NodeType.RECIPE not in kinds

    def test_line_numbers_increase(self):
        """Test that top-level line numbers are strictly increasing."""
        lines = [n.line for n in parse(self.EXAMPLE)]
        assert lines == sorted(set(lines))


class TestParseAnyInput:
    """Test that the parser accepts arbitrary text."""

    ALPHABET = "ab:=?+!#@%$()|\\\t \n-.;"

    SEEDS = [
        "# comment\n",
        "VAR:=value\n",
        "target: prereq\n\t@echo hello\n",
        "ifeq ($(OS),Linux)\nCC := gcc\nendif\n",
        "define MY_FUNC\n\t@echo hello\nendef\n",
        "SOURCES := \\\n\tmain.go \\\n\tutils.go\n",
        "\\",
        "\\\n",
        "define\n",
        "\t\n",
        "##@\n",
        ":",
        "=",
        "|",
    ]

    @pytest.mark.parametrize("text", SEEDS)
    def test_seeds(self, text):
        """Test that tricky fragments parse without raising."""
        assert isinstance(parse(text), list)

    def test_random_input(self):
        """Test that random text never raises and keeps source order."""
        rng = random.Random(1234)
        for _ in range(500):
            text = "".join(rng.choice(self.ALPHABET) for _ in range(rng.randint(0, 80)))
            nodes = parse(text)
            lines = [n.line for n in nodes]
            assert lines == sorted(lines)


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
