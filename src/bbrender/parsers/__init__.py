#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/bbrender/parsers/__init__.py
"""Front half of the pipeline: tokenizer, tree builder and parser facade.

- tokenizer: ``Tokenizer`` / ``Token``
- tree_builder: ``TreeBuilder``
- bbcode: ``BBCodeParser`` / ``ParseResult``
"""
