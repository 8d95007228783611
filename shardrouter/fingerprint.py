"""Canonical fingerprints of SQL queries.

A fingerprint replaces literal values with ``?``, collapses whitespace,
removes comments and lowercases the query, so that queries differing only
in their values map to the same text.
"""

from __future__ import annotations

from enum import Enum, auto

__all__ = ["fingerprint"]


class _State(Enum):
    UNKNOWN = auto()
    IN_WORD = auto()  # \S+
    IN_NUMBER = auto()  # [0-9a-fA-Fx.-]
    IN_SPACE = auto()  # space, tab, \r, \n
    IN_OP = auto()  # [=<>!], usually before a number
    OP_OR_NUMBER = auto()  # + in 2 + 2 or +3e-9
    IN_QUOTE = auto()  # '...' or "..."
    SUB_OR_OLC = auto()  # - or start of -- comment
    IN_DASH = auto()  # -- starts a one-line comment when a space follows
    IN_OLC = auto()  # -- one-line comment
    DIV_OR_MLC = auto()  # / operator or start of /* comment */
    MLC_OR_MYSQL_CODE = auto()  # /* comment */ or /*! mysql code */
    IN_MLC = auto()  # /* comment */
    IN_VALUES = auto()  # VALUES (1), ..., (N)
    MORE_VALUES_OR_UNKNOWN = auto()  # , (2nd+) or ON DUPLICATE KEY or end
    ORDER_BY = auto()  # ORDER BY
    ON_DUPE_KEY_UPDATE = auto()  # ON DUPLICATE KEY UPDATE
    IN_NUMBER_IN_WORD = auto()  # e.g. db23


_SPACES = " \t\r\n"
_VALUE_WORDS = ("in", "value", "values")


def _is_space(ch: str) -> bool:
    return ch != "" and ch in _SPACES


def _is_digit(ch: str) -> bool:
    return "0" <= ch <= "9"


def _is_number_char(ch: str) -> bool:
    return (
        _is_digit(ch)
        or "a" <= ch <= "f"
        or "A" <= ch <= "F"
        or ch in (".", "x", "-")
    )


def _is_word_char(ch: str) -> bool:
    return "g" <= ch <= "z" or "G" <= ch <= "Z" or ch == "_"


def fingerprint(query: str, replace_numbers_in_words: bool = False) -> str:
    """Return the canonical form of ``query``.

    With ``replace_numbers_in_words`` set, digits embedded in identifiers are
    replaced too: ``org235.t`` becomes ``org?.t``.
    """
    S = _State
    q = query + " "  # lets the scan run past the end of the original query
    prev_word = ""
    out: list[str] = []
    pr = "\x00"
    s = S.UNKNOWN
    sql_state = S.UNKNOWN
    quote_char = ""
    cp_from = 0
    cp_to = 0
    add_space = False
    escape = False
    par_open = 0
    par_open_total = 0
    value_no = 0
    first_par = 0

    for qi, r in enumerate(q):
        # 1. Skip parts of the query for certain states.
        if s is S.IN_QUOTE:
            if r != quote_char:
                if escape:
                    escape = False
                elif r == "\\":
                    escape = True
            elif escape:
                escape = False
            else:
                escape = False
                cp_from = qi + 1
                if sql_state is S.IN_VALUES:
                    s = S.IN_VALUES
                else:
                    out.append("?")
                    s = S.UNKNOWN
            continue
        elif s is S.IN_NUMBER_IN_WORD:
            if _is_digit(r):
                continue
            out.append("?")
            cp_from = qi
            s = S.UNKNOWN if _is_space(r) else S.IN_WORD
        elif s is S.IN_NUMBER:
            if _is_number_char(r):
                continue
            if _is_word_char(r):
                cp_to = qi
                s = S.IN_WORD
            else:
                out.append("?")
                cp_from = qi
                cp_to = qi
                s = S.UNKNOWN
        elif s is S.IN_VALUES:
            if r == ")":
                par_open -= 1
                par_open_total += 1
            elif r == "(":
                par_open += 1
                if par_open == 1:
                    first_par = qi
            elif r in ("'", '"'):
                s = S.IN_QUOTE
                quote_char = r
                continue
            elif _is_space(r):
                continue
            if par_open > 0:
                continue
            if par_open_total == 0:
                s = S.IN_WORD
                continue
            value_no += 1
            if value_no == 1:
                out.extend("(?+)" if qi - first_par > 1 else "()")
                first_par = 0
            s = S.MORE_VALUES_OR_UNKNOWN
            pr = r
            cp_from = qi + 1
            par_open_total = 0
            continue
        elif s is S.IN_MLC:
            if pr == "*" and r == "/":
                s = S.UNKNOWN
            continue
        elif s is S.MLC_OR_MYSQL_CODE:
            if r != "!":
                s = S.IN_MLC
                continue
            s = S.IN_WORD
        elif s is S.IN_OLC:
            if r == "\n":
                s = S.UNKNOWN
            continue
        elif _is_space(r) and _is_space(pr):
            cp_from = qi + 1
            pr = r
            continue

        # 2. Change state based on the character and the current state.
        if _is_digit(r):
            if s is S.OP_OR_NUMBER:
                cp_to = qi - 1
                s = S.IN_NUMBER
            elif s is S.IN_OP:
                cp_to = qi
                s = S.IN_NUMBER
            elif s is S.IN_WORD:
                if pr in ("(", ","):
                    cp_to = qi
                    s = S.IN_NUMBER
                elif replace_numbers_in_words:
                    s = S.IN_NUMBER_IN_WORD
                    cp_to = qi
            else:
                s = S.IN_NUMBER
                cp_to = qi
        elif _is_space(r):
            if s is S.UNKNOWN:
                if out and not _is_space(out[-1]):
                    out.append(" ")
                    cp_from = qi + 1
            elif s is S.IN_DASH:
                s = S.IN_OLC
                if cp_to > 2:
                    cp_to = qi - 2
                    add_space = True
            elif s is S.MORE_VALUES_OR_UNKNOWN:
                if value_no == 1:
                    out.append(" ")
            else:
                word = q[cp_from:qi].lower()
                if word == "use" and prev_word == "":
                    # Only a leading USE; elsewhere it may be USE INDEX.
                    return "use ?"
                if (word == "null" and prev_word not in ("is", "not")) or word == "null,":
                    out.append("?")
                    if word.endswith(","):
                        out.append(",")
                    out.append(" ")
                    cp_from = qi + 1
                elif prev_word == "order" and word == "by":
                    sql_state = S.ORDER_BY
                elif sql_state is S.ORDER_BY and word in ("asc", "asc,", "asc "):
                    cp_from = qi
                    if word.endswith(","):
                        out[-1] = ","
                        out.append(" ")
                elif prev_word == "key" and word == "update":
                    sql_state = S.ON_DUPE_KEY_UPDATE
                s = S.IN_SPACE
                cp_to = qi
                add_space = True
        elif r in ("'", '"'):
            if pr != "\\" and s is not S.IN_QUOTE:
                s = S.IN_QUOTE
                quote_char = r
                cp_to = qi
                if pr in ("x", "b"):
                    # Hex or binary literal such as x'0F' or b'0101'.
                    cp_to = -2
        elif r in ("=", "<", ">", "!"):
            if s not in (S.IN_WORD, S.IN_OP):
                cp_from = qi
            s = S.IN_OP
        elif r == "/":
            s = S.DIV_OR_MLC
        elif r == "*" and s is S.DIV_OR_MLC:
            s = S.MLC_OR_MYSQL_CODE
        elif r == "+":
            s = S.OP_OR_NUMBER
        elif r == "-":
            s = S.IN_DASH if pr == "-" else S.OP_OR_NUMBER
        elif r == ".":
            if s in (S.IN_NUMBER, S.IN_OP):
                s = S.IN_NUMBER
                cp_to = qi
        elif r == "(":
            if prev_word == "call":
                return "call " + q[cp_from:qi]
            if sql_state is not S.ON_DUPE_KEY_UPDATE and (
                (
                    s in (S.IN_SPACE, S.MORE_VALUES_OR_UNKNOWN)
                    and prev_word in _VALUE_WORDS
                )
                or q[cp_from:qi].lower() in _VALUE_WORDS
            ):
                s = S.IN_VALUES
                sql_state = S.IN_VALUES
                par_open = 1
                first_par = qi
                if value_no == 0:
                    cp_to = qi
            elif s is not S.IN_WORD:
                value_no = 0
                cp_from = qi
                s = S.IN_WORD
        elif r == "," and s is S.MORE_VALUES_OR_UNKNOWN:
            pass
        elif r == ":" and prev_word == "administrator":
            return q[:-1]
        elif r == "#":
            s = S.IN_OLC
        else:
            if s not in (S.IN_WORD, S.IN_OP):
                value_no = 0
                cp_from = qi
                if sql_state is S.IN_VALUES:
                    sql_state = S.UNKNOWN
            s = S.IN_WORD

        # 3. Copy a slice of the query into the fingerprint.
        if cp_to > cp_from:
            prev_word = q[cp_from:cp_to].lower()
            out.extend(prev_word)
            cp_from = cp_to
            if prev_word in _VALUE_WORDS and sql_state is not S.ON_DUPE_KEY_UPDATE:
                add_space = False
                s = S.IN_VALUES
                sql_state = S.IN_VALUES
            elif add_space:
                out.append(" ")
                cp_from += 1
                add_space = False
        pr = r

    return "".join(out).rstrip(_SPACES)