"""
Tests for writing command trees back to source text.
"""

import pytest

from cmdtree.core.tree_node import ArgumentNode, LiteralNode
from cmdtree.core.types import (
    BoolType,
    DoubleType,
    ExtensionType,
    FloatType,
    IntegerType,
    LongType,
    StringMode,
    StringType,
)
from cmdtree.parsing.lexer import tokenize
from cmdtree.parsing.parser import parse
from cmdtree.parsing.serializer import format_argument_type, format_tree, format_word


class TestFormatWord:
    """Tests for word quoting."""

    @pytest.mark.parametrize(
        "word", ["help", "minecraft:entity", "a-b_c", "+1.5", "back\\slash", "C:\\path"]
    )
    def test_plain_words_are_unquoted(self, word):
        assert format_word(word) == word
        assert tokenize(format_word(word))[0].text == word

    @pytest.mark.parametrize(
        ("word", "expected"),
        [
            ("", '""'),
            ("two words", '"two words"'),
            ("a;b", '"a;b"'),
            ("{", '"{"'),
            ('say "hi"', r'"say \"hi\""'),
            ("line\nbreak", r'"line\nbreak"'),
            ("//note", '"//note"'),
            ("/*note", '"/*note"'),
            ("grüße", '"grüße"'),
        ],
    )
    def test_words_needing_quotes(self, word, expected):
        assert format_word(word) == expected
        assert tokenize(expected)[0].text == word

    def test_inner_slashes_stay_unquoted(self):
        assert format_word("a//b") == "a//b"


class TestFormatArgumentType:
    """Tests for argument type declarations."""

    @pytest.mark.parametrize(
        ("spec", "expected"),
        [
            (BoolType(), "bool"),
            (StringType(StringMode.QUOTABLE_PHRASE), "string quotable_phrase"),
            (IntegerType(), "integer"),
            (IntegerType(min=0), "integer 0"),
            (IntegerType(min=-5, max=5), "integer -5 5"),
            (IntegerType(max=10), "integer min 10"),
            (LongType(min=0, max=2**40), f"long 0 {2**40}"),
            (FloatType(min=0.5), "float 0.5"),
            (DoubleType(min=-1.0, max=1e-05), "double -1.0 1e-05"),
            (ExtensionType("minecraft", "block_pos"), "minecraft:block_pos"),
            (
                ExtensionType("my_mod", "range", arguments=("low", "two words")),
                'my_mod:range low "two words"',
            ),
        ],
    )
    def test_declarations(self, spec, expected):
        assert format_argument_type(spec) == expected

    def test_unsupported_type(self):
        with pytest.raises(TypeError):
            format_argument_type("integer")


class TestFormatTree:
    """Tests for whole-tree rendering."""

    def test_leaf_root(self):
        assert format_tree(LiteralNode(name="root")) == "root;\n"

    def test_nested_layout(self):
        tree = LiteralNode(
            name="root",
            children=(
                ArgumentNode(
                    name="amount",
                    argument_type=IntegerType(min=1, max=64),
                    children=(LiteralNode(name="confirm"),),
                ),
                LiteralNode(name="help"),
            ),
        )
        assert format_tree(tree) == (
            "root {\n"
            "    amount integer 1 64 {\n"
            "        confirm;\n"
            "    }\n"
            "    help;\n"
            "}\n"
        )

    def test_custom_indent(self):
        tree = LiteralNode(name="a", children=(LiteralNode(name="b"),))
        assert format_tree(tree, indent="\t") == "a {\n\tb;\n}\n"

    def test_hand_built_tree_survives_reparse(self):
        tree = LiteralNode(
            name="tp",
            children=(
                ArgumentNode(
                    name="x",
                    argument_type=DoubleType(min=-30000000.0, max=30000000.0),
                    children=(
                        ArgumentNode(name="silent", argument_type=BoolType()),
                    ),
                ),
                ArgumentNode(name="ticks", argument_type=LongType(min=0)),
                LiteralNode(name="a b"),
                LiteralNode(name=""),
            ),
        )
        assert parse(format_tree(tree)) == tree

    def test_output_parses_to_equal_tree(self, minecraft_registry):
        source = """
        admin {
            "reload config";
            kick {
                target minecraft:entity player {
                    reason string greedy_phrase;
                }
            }
            holders score_holder true;
            level integer min 4;
            ratio double 0.25;
            "say \\"hi\\"" bool;
        }
        """
        tree = parse(source, minecraft_registry)
        rendered = format_tree(tree)
        assert parse(rendered, minecraft_registry) == tree
        assert "target minecraft:entity player {" in rendered
