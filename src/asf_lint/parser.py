"""
Statement Boundary Parser for ASF

Single forward pass over the token list that recognizes statement shapes and
reports statements missing their terminating ';'.

Structure:
- Dispatch on the current token (if, for, class, let, ...)
- Blocks are parsed recursively; groupings inside expressions are skipped as
  balanced spans
- No tree is built: the only output is the list of diagnostics

Recovery:
- A statement that consumed no token triggers recover_stuck(), which drops
  exactly one token. Every loop iteration therefore advances the cursor.
- Expression scans stop at a statement-start keyword at depth 0, so one
  missing ';' does not swallow the statements that follow it.
"""

from __future__ import annotations

from enum import Enum, auto
from typing import List, Optional, Set

from .diagnostics import Diagnostic, missing_semicolon
from .token_types import CLOSERS, STMT_STARTERS, TT, Tok, eof_tok

# Blocks, inline bodies and prefixed statements nested deeper than this are
# skipped or scanned flat instead of being parsed recursively.
MAX_NESTING = 100


class Context(Enum):
    """What the statements being parsed belong to."""

    TOP = auto()
    CLASS_BODY = auto()


# ============================================================================
# Parser
# ============================================================================


class Parser:
    """
    Statement boundary parser.

    One instance per run owns the whole parser state: the cursor, the context
    stack, and the diagnostics collected so far.

    A statement's trailing ';' is satisfied by:
    1. the next token being ';'
    2. the closing '}' of the enclosing block (last statement of a block)
    3. the statement's own last token already being ';' (inline bodies such as
       ``if (x) print(x);``)
    Otherwise one diagnostic is anchored at the last token the statement
    consumed.
    """

    def __init__(self, tokens: List[Tok]):
        self.tokens = tokens
        self.pos = 0
        self.context: List[Context] = []
        self.block_depth = 0
        self.nesting = 0
        self.diagnostics: List[Diagnostic] = []
        self.reported: Set[int] = set()

        self.eof = eof_tok(tokens[-1] if tokens else None)

    # ========================================================================
    # Token Navigation
    # ========================================================================

    @property
    def current(self) -> Tok:
        if self.pos < len(self.tokens):
            return self.tokens[self.pos]
        return self.eof

    def peek(self, offset: int = 0) -> Tok:
        """Look ahead at token"""
        idx = self.pos + offset
        if idx < len(self.tokens):
            return self.tokens[idx]
        return self.eof

    def advance(self) -> Tok:
        """Consume current token and move to next"""
        prev = self.current
        if self.pos < len(self.tokens):
            self.pos += 1
        return prev

    def check(self, *types: TT) -> bool:
        """Check if current token matches any of the given types"""
        return self.current.type in types

    def match(self, *types: TT) -> bool:
        """Check and consume if current token matches"""
        if self.check(*types):
            self.advance()
            return True
        return False

    def at_end(self) -> bool:
        return self.pos >= len(self.tokens)

    def ctx(self) -> Context:
        return self.context[-1] if self.context else Context.TOP

    def starts_statement(self) -> bool:
        """True when the current token opens a new statement.

        ``fun`` only counts when followed by a name; ``fun (`` is an anonymous
        function expression.
        """
        tok = self.current
        if tok.type not in STMT_STARTERS:
            return False
        if tok.type == TT.FUN:
            return self.peek(1).type == TT.IDENT
        return True

    # ========================================================================
    # Top-Level Parsing
    # ========================================================================

    def parse(self) -> List[Diagnostic]:
        """Parse the whole token list, return missing-separator diagnostics"""
        while not self.at_end():
            if self.match(TT.SEMI):
                continue

            before = self.pos
            # A stray closer at top level has no statement to belong to.
            if not self.check(*CLOSERS):
                self.parse_statement()
            if self.pos == before:
                self.recover_stuck()

        return self.diagnostics

    def recover_stuck(self):
        """Recovery transition: nothing matched and nothing was consumed, so
        consume one token."""
        self.advance()

    def parse_statements_until_close(self):
        """Parse statements up to (not including) the '}' closing this block."""
        while not self.at_end() and not self.check(TT.RBRACE):
            if self.match(TT.SEMI):
                continue

            before = self.pos
            self.parse_statement()
            if self.pos == before:
                self.recover_stuck()

    def parse_block(self, context: Optional[Context] = None):
        """
        Parse a block:
        '{' statement* '}' | statement
        """
        if self.at_end():
            return

        if self.nesting >= MAX_NESTING:
            if self.check(TT.LBRACE):
                self.skip_braces()
            else:
                self.scan_expr()
            return

        if not self.check(TT.LBRACE):
            self.nesting += 1
            self.parse_statement()
            self.nesting -= 1
            return

        self.advance()
        if context is not None:
            self.context.append(context)
        self.block_depth += 1
        self.nesting += 1

        self.parse_statements_until_close()

        self.nesting -= 1
        self.block_depth -= 1
        if context is not None:
            self.context.pop()
        self.match(TT.RBRACE)

    def parse_body(self):
        """Function, method or constructor body: its statements are ordinary
        statements even inside a class."""
        self.parse_block(context=Context.TOP)

    # ========================================================================
    # Statements
    # ========================================================================

    def parse_statement(self):
        """
        Parse a single statement.

        Statements include:
        - Control flow (if, for, while, try, switch)
        - Declarations (fun, class, let, field, import, export)
        - Class members (constructor, static, methods)
        - Simple statements (return, break, continue, print, super)
        - Destructuring assignment and expression statements
        """
        if self.at_end():
            return

        # Empty statement
        if self.match(TT.SEMI):
            return

        # Control flow
        if self.check(TT.IF):
            return self.parse_if_stmt()
        if self.check(TT.FOR, TT.WHILE):
            return self.parse_loop_stmt()
        if self.check(TT.TRY):
            return self.parse_try_stmt()
        if self.check(TT.SWITCH):
            return self.parse_switch_stmt()

        # Declarations
        if self.check(TT.FUN):
            return self.parse_fun_stmt()
        if self.check(TT.CLASS):
            return self.parse_class_stmt()
        if self.check(TT.EXPORT):
            return self.parse_export_stmt()
        if self.check(TT.IMPORT):
            return self.parse_import_stmt()
        if self.check(TT.LET, TT.FIELD):
            return self.parse_var_decl()

        # Simple statements
        if self.check(TT.RETURN):
            return self.parse_return_stmt()
        if self.check(TT.BREAK, TT.CONTINUE):
            return self.parse_jump_stmt()
        if self.check(TT.PRINT):
            return self.parse_print_stmt()
        if self.check(TT.SUPER):
            return self.parse_super_stmt()

        # Class members
        if self.check(TT.CONSTRUCTOR):
            return self.parse_constructor()
        if self.check(TT.STATIC):
            return self.parse_static_member()
        if self.ctx() == Context.CLASS_BODY and self.looks_like_method():
            return self.parse_method()

        if self.check(TT.LSQB):
            return self.parse_destructure_or_expr()

        return self.parse_expr_stmt()

    def parse_if_stmt(self):
        """
        if (cond) block [elseif (cond) block | else if (cond) block]* [else block] ;
        """
        start = self.pos
        self.advance()
        self.skip_parens()
        self.parse_block()

        while True:
            if self.match(TT.ELSEIF):
                pass
            elif self.check(TT.ELSE) and self.peek(1).type == TT.IF:
                # `else if` chains are flattened into this loop.
                self.advance()
                self.advance()
            else:
                break
            self.skip_parens()
            self.parse_block()

        if self.match(TT.ELSE):
            self.parse_block()

        self.expect_semi(start)

    def parse_loop_stmt(self):
        """for (header) block ;  |  while (cond) block ;"""
        start = self.pos
        self.advance()
        self.skip_parens()
        self.parse_block()
        self.expect_semi(start)

    def parse_try_stmt(self):
        """try block [catch [(binding)] block] ;"""
        start = self.pos
        self.advance()
        self.parse_block()

        if self.match(TT.CATCH):
            self.skip_parens()
            self.parse_block()

        self.expect_semi(start)

    def parse_switch_stmt(self):
        """switch (value) { ... } ;  -- the body is skipped, not parsed"""
        start = self.pos
        self.advance()
        self.skip_parens()
        self.skip_braces()
        self.expect_semi(start)

    def parse_fun_stmt(self):
        """fun name(params) body ;  -- anonymous functions are expressions"""
        if self.peek(1).type != TT.IDENT:
            return self.parse_expr_stmt()

        start = self.pos
        self.advance()  # fun
        self.advance()  # name
        self.skip_parens()
        self.parse_body()
        self.expect_semi(start)

    def parse_class_stmt(self):
        """class Name [extends Base] { member* } ;"""
        start = self.pos
        self.advance()

        if not self.at_end() and not self.check(TT.LBRACE):
            self.advance()  # name
        if self.match(TT.EXTENDS):
            # Base name, possibly dotted
            while not (self.at_end() or self.check(TT.LBRACE, TT.SEMI) or self.starts_statement()):
                self.advance()

        if self.check(TT.LBRACE):
            self.parse_block(context=Context.CLASS_BODY)

        self.expect_semi(start)

    def parse_export_stmt(self):
        """
        export fun name(params) body ;
        export default expr ;
        export { a, b } [from module] ;
        export <declaration>
        """
        start = self.pos
        while self.match(TT.EXPORT):
            pass

        if self.starts_statement():
            # The exported declaration owns its own separator.
            return self.parse_nested_statement()

        if self.match(TT.DEFAULT):
            if self.starts_statement():
                return self.parse_nested_statement()
            self.scan_expr()
        elif self.check(TT.LBRACE):
            self.skip_braces()
            if self.match(TT.FROM):
                self.skip_module_path()
        else:
            self.scan_expr()

        self.expect_semi(start)

    def parse_import_stmt(self):
        """
        import name from module ;
        import { a, b as c } from module ;
        import name, { a } from module ;
        import * as ns from module ;
        import module ;
        """
        start = self.pos
        self.advance()

        while not self.at_end() and not self.check(TT.SEMI):
            if self.match(TT.FROM):
                self.skip_module_path()
                break
            if self.check(TT.LBRACE):
                self.skip_braces()
                continue
            if self.check(*CLOSERS) or self.starts_statement():
                break
            self.advance()

        self.expect_semi(start)

    def parse_var_decl(self):
        """let/field name [= initializer] ;"""
        start = self.pos
        self.advance()

        while not self.at_end() and not self.check(TT.SEMI):
            if self.check(TT.LPAR):
                self.skip_parens()
                continue
            if self.check(TT.LSQB):
                self.skip_brackets()
                continue
            if self.check(TT.LBRACE):
                self.skip_braces()
                continue
            # Unbalanced closer: the enclosing block (or group) ends here.
            if self.check(*CLOSERS):
                break
            if self.starts_statement():
                break
            self.advance()

        self.expect_semi(start)

    def parse_return_stmt(self):
        start = self.pos
        self.advance()
        if not (self.at_end() or self.check(TT.SEMI, TT.RBRACE) or self.starts_statement()):
            self.scan_expr()
        self.expect_semi(start)

    def parse_jump_stmt(self):
        """break ; | continue ;"""
        start = self.pos
        self.advance()
        self.expect_semi(start)

    def parse_print_stmt(self):
        start = self.pos
        self.advance()
        self.skip_parens()
        self.expect_semi(start)

    def parse_super_stmt(self):
        """super[(args)] followed by .name / [index] / (args) accesses ;"""
        start = self.pos
        self.advance()
        self.skip_parens()

        while not self.at_end():
            if self.match(TT.DOT):
                if not self.at_end():
                    self.advance()
                continue
            if self.check(TT.LSQB):
                self.skip_brackets()
                continue
            if self.check(TT.LPAR):
                self.skip_parens()
                continue
            break

        self.expect_semi(start)

    def parse_constructor(self):
        """constructor(params) body  -- a declaration, no ';' required"""
        self.advance()
        self.skip_parens()
        self.parse_body()

    def parse_static_member(self):
        """static name(params) body  -- or a static-prefixed statement"""
        while self.match(TT.STATIC):
            pass
        if self.check(TT.IDENT) and self.peek(1).type == TT.LPAR:
            self.advance()
            self.skip_parens()
            self.parse_body()
            return
        self.parse_nested_statement()

    def parse_nested_statement(self):
        """Statement owned by a prefix (export, export default, static).

        Past MAX_NESTING the statement is scanned as a flat expression.
        """
        if self.nesting >= MAX_NESTING:
            start = self.pos
            self.scan_expr()
            self.expect_semi(start)
            return

        self.nesting += 1
        self.parse_statement()
        self.nesting -= 1

    def looks_like_method(self) -> bool:
        """name(params) { ... } at the current position"""
        if not self.check(TT.IDENT) or self.peek(1).type != TT.LPAR:
            return False
        close = self.find_close(self.pos + 1, TT.LPAR, TT.RPAR)
        return close + 1 < len(self.tokens) and self.tokens[close + 1].type == TT.LBRACE

    def parse_method(self):
        """name(params) body  -- a declaration, no ';' required"""
        self.advance()
        self.skip_parens()
        self.parse_body()

    def parse_destructure_or_expr(self):
        """[a, b] = expr ;  -- or an expression statement starting with '['"""
        close = self.find_close(self.pos, TT.LSQB, TT.RSQB)
        if close + 1 < len(self.tokens) and self.tokens[close + 1].type == TT.ASSIGN:
            start = self.pos
            self.pos = close + 2
            self.scan_expr()
            self.expect_semi(start)
            return
        self.parse_expr_stmt()

    def parse_expr_stmt(self):
        start = self.pos
        self.scan_expr()
        self.expect_semi(start)

    # ========================================================================
    # Scanning Helpers
    # ========================================================================

    def scan_expr(self):
        """
        Consume an expression, treating nested groups as opaque.

        Stops at:
        - ';' at depth 0
        - a closer with no matching opener
        - right after a '}' that brings every depth back to 0
        - a statement-start keyword at depth 0 after the first token (recovery
          heuristic)
        """
        start = self.pos
        paren = bracket = brace = 0

        while not self.at_end():
            t = self.current.type
            at_depth0 = paren == 0 and bracket == 0 and brace == 0

            if t == TT.LPAR:
                paren += 1
            elif t == TT.RPAR:
                paren -= 1
                if paren < 0:
                    return
            elif t == TT.LSQB:
                bracket += 1
            elif t == TT.RSQB:
                bracket -= 1
                if bracket < 0:
                    return
            elif t == TT.LBRACE:
                brace += 1
            elif t == TT.RBRACE:
                brace -= 1
                if brace < 0:
                    return
                self.advance()
                if paren == 0 and bracket == 0 and brace == 0:
                    return
                continue
            elif t == TT.SEMI and at_depth0:
                return
            elif at_depth0 and self.pos > start and self.starts_statement():
                return

            self.advance()

    def skip_group(self, open_type: TT, close_type: TT):
        """Skip a balanced group starting at the current token (if it opens
        one). Unbalanced groups run to the end of input."""
        if not self.check(open_type):
            return
        self.pos = min(self.find_close(self.pos, open_type, close_type) + 1, len(self.tokens))

    def skip_parens(self):
        self.skip_group(TT.LPAR, TT.RPAR)

    def skip_brackets(self):
        self.skip_group(TT.LSQB, TT.RSQB)

    def skip_braces(self):
        self.skip_group(TT.LBRACE, TT.RBRACE)

    def skip_module_path(self):
        """Module specifier after 'from'. String specifiers are already
        blanked, so only bare dotted names leave tokens."""
        while self.check(TT.IDENT, TT.DOT):
            self.advance()

    def find_close(self, idx: int, open_type: TT, close_type: TT) -> int:
        """Index of the closer matching the opener at *idx*, or the last index
        when unbalanced."""
        depth = 0
        j = idx
        while j < len(self.tokens):
            t = self.tokens[j].type
            if t == open_type:
                depth += 1
            elif t == close_type:
                depth -= 1
                if depth == 0:
                    return j
            j += 1
        return len(self.tokens) - 1

    # ========================================================================
    # Separator Check
    # ========================================================================

    def expect_semi(self, start: int):
        """Require the ';' closing the statement that began at *start*."""
        if self.match(TT.SEMI):
            return
        if self.pos <= start:
            return

        last = self.tokens[self.pos - 1]
        if last.type == TT.SEMI:
            return
        if self.block_depth > 0 and self.check(TT.RBRACE):
            return

        self.report(last)

    def report(self, tok: Tok):
        if tok.start_pos in self.reported:
            return
        self.reported.add(tok.start_pos)
        self.diagnostics.append(missing_semicolon(tok))


def parse_tokens(tokens: List[Tok]) -> List[Diagnostic]:
    """Run the statement boundary parser over *tokens*"""
    return Parser(tokens).parse()
