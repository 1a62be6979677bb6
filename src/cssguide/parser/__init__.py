from cssguide.parser.parser import SYNTAX_RULE, parse, parse_text
from cssguide.parser.tokenizer import tokenize

__all__ = ["tokenize", "parse", "parse_text", "SYNTAX_RULE"]
