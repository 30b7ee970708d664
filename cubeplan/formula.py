from __future__ import annotations

from dataclasses import dataclass

from cubeplan.notation import BASIC_FACES, invert_moves


class FormulaSyntaxError(ValueError):
    def __init__(self, message: str, position: int) -> None:
        super().__init__(f"{message} at index {position}")
        self.position = position


@dataclass(frozen=True)
class _Token:
    kind: str
    value: str
    start: int


class FormulaConverter:
    """Strict parser for typed algorithms: face turns, groups and repeats."""

    @classmethod
    def convert(cls, formula: str, repeat: int = 1) -> list[str]:
        if repeat < 1:
            raise ValueError("repeat must be >= 1")

        parser = _FormulaParser(tokens=cls._tokenize(formula), formula=formula)
        moves = parser.parse_sequence()
        if parser.has_more():
            token = parser.peek()
            raise FormulaSyntaxError(f"Unexpected token '{token.value}'", token.start)
        return moves * repeat

    @classmethod
    def inverse(cls, formula: str) -> list[str]:
        return invert_moves(cls.convert(formula))

    @staticmethod
    def _tokenize(formula: str) -> list[_Token]:
        tokens: list[_Token] = []
        i = 0
        length = len(formula)

        while i < length:
            char = formula[i]

            if char.isspace():
                i += 1
                continue

            if char in "()^":
                kind = {"(": "LPAREN", ")": "RPAREN", "^": "CARET"}[char]
                tokens.append(_Token(kind=kind, value=char, start=i))
                i += 1
                continue

            if char.isdigit():
                start = i
                while i < length and formula[i].isdigit():
                    i += 1
                tokens.append(_Token(kind="INT", value=formula[start:i], start=start))
                continue

            if char in BASIC_FACES:
                start = i
                i += 1
                if i < length and formula[i] in "'2":
                    i += 1
                tokens.append(_Token(kind="MOVE", value=formula[start:i], start=start))
                continue

            if char.isalpha():
                raise FormulaSyntaxError(f"Unknown move token '{char}'", i)
            raise FormulaSyntaxError(f"Unsupported character '{char}'", i)

        return tokens


@dataclass
class _FormulaParser:
    tokens: list[_Token]
    formula: str
    index: int = 0

    def has_more(self) -> bool:
        return self.index < len(self.tokens)

    def peek(self) -> _Token:
        return self.tokens[self.index]

    def consume(self) -> _Token:
        token = self.tokens[self.index]
        self.index += 1
        return token

    def parse_sequence(self, stop_at_rparen: bool = False) -> list[str]:
        moves: list[str] = []

        while self.has_more():
            token = self.peek()
            if token.kind == "RPAREN":
                if stop_at_rparen:
                    break
                raise FormulaSyntaxError("Unexpected ')'", token.start)

            atom, is_group = self.parse_atom()
            moves.extend(atom * self.parse_repeat(is_group=is_group))

        if stop_at_rparen:
            if not self.has_more() or self.peek().kind != "RPAREN":
                raise FormulaSyntaxError("Missing closing ')'", len(self.formula))
            self.consume()

        return moves

    def parse_atom(self) -> tuple[list[str], bool]:
        token = self.consume()

        if token.kind == "LPAREN":
            return self.parse_sequence(stop_at_rparen=True), True
        if token.kind == "MOVE":
            return [token.value], False

        raise FormulaSyntaxError(
            f"Expected move or '(' but got '{token.value}'",
            token.start,
        )

    def _read_repeat(self) -> int:
        int_token = self.consume()
        repeat = int(int_token.value)
        if repeat < 1:
            raise FormulaSyntaxError("Repeat must be >= 1", int_token.start)
        return repeat

    def parse_repeat(self, is_group: bool) -> int:
        if not self.has_more():
            return 1

        token = self.peek()
        if token.kind == "CARET":
            self.consume()
            if not self.has_more() or self.peek().kind != "INT":
                raise FormulaSyntaxError("Expected integer after '^'", token.start)
            return self._read_repeat()

        if is_group and token.kind == "INT":
            return self._read_repeat()

        return 1
