from lispy.reader.ast import AstNode
from lispy.reader.parser import lex, parse, Token, TokenStream
