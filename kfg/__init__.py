"""KFG — lexer and parser for the KFG configuration language."""

from kfg.lexer import Token, TokenType, Position, tokenize, filter_tokens, lex
from kfg.parser import Parser, parse
from kfg.ast_nodes import Ast, Node, String, Integer, Float, Bool, Array, Dict, Null
from kfg.loader import parse_source, loads, load
from kfg.errors import KfgError, ParseError, NumberFormatError, ConfigError


__all__ = [
    "Token", "TokenType", "Position", "tokenize", "filter_tokens", "lex",
    "Parser", "parse", "parse_source", "loads", "load",
    "Ast", "Node", "String", "Integer", "Float", "Bool", "Array", "Dict", "Null",
    "KfgError", "ParseError", "NumberFormatError", "ConfigError",
]
