"""Unit tests for the MML tokenizer."""

from mmlsmf.tokenizer import Token, clean_track, tokenize


def _ops(track: str) -> list[str]:
    return [token.op for token in tokenize(track)]


def test_clean_track_removes_all_whitespace() -> None:
    assert clean_track(" c d\n\te\r\n") == "cde"


def test_tokenize_splits_controls_and_notes() -> None:
    assert _ops("t120l8o5v12<>cdefgabnr") == [
        "t", "l", "o", "v", "<", ">", "c", "d", "e", "f", "g", "a", "b", "n", "r",
    ]


def test_tokenize_lowercases_ops() -> None:
    assert _ops("T120L4CDR") == ["t", "l", "c", "d", "r"]


def test_tokenize_full_note_token() -> None:
    (token,) = tokenize("c+4.&")
    assert token == Token(
        op="c", accidental="+", digits="4", dotted=True, tied=True, text="c+4.&"
    )


def test_tokenize_full_control_token() -> None:
    (token,) = tokenize("l16.&")
    assert token.op == "l"
    assert token.digits == "16"
    assert token.dotted
    assert token.tied
    assert token.is_control


def test_tokenize_sharp_and_flat_accidentals() -> None:
    tokens = tokenize("c#d-e+")
    assert [t.accidental for t in tokens] == ["#", "-", "+"]


def test_tokenize_skips_garbage() -> None:
    assert _ops("c!?%d$$ e") == ["c", "d", "e"]


def test_tokenize_drops_accidental_after_control() -> None:
    # "+8" cannot start a token, so the length command keeps no digits.
    tokens = tokenize("l+8c")
    assert [t.text for t in tokens] == ["l", "c"]
    assert tokens[0].digits == ""


def test_tokenize_whitespace_inside_token() -> None:
    (token,) = tokenize("c 1 6")
    assert token.digits == "16"


def test_tokenize_empty_track() -> None:
    assert tokenize("") == []
    assert tokenize("   ") == []


def test_tokenize_is_deterministic() -> None:
    track = "t190l8cdefgab>c4.&c8r4n60"
    assert tokenize(track) == tokenize(track)


def test_control_value_missing_digits_is_zero() -> None:
    assert Token(op="o").control_value == 0


def test_control_value_leading_zero_is_zero() -> None:
    assert Token(op="o", digits="05").control_value == 0
    assert Token(op="t", digits="0120").control_value == 0


def test_control_value_reads_decimal() -> None:
    assert Token(op="t", digits="190").control_value == 190


def test_note_value_missing_digits_is_none() -> None:
    assert Token(op="c").note_value is None


def test_note_value_allows_leading_zero() -> None:
    assert Token(op="c", digits="08").note_value == 8


def test_oversized_literal_reads_as_zero() -> None:
    assert Token(op="n", digits="1" * 50).note_value == 0
    assert Token(op="o", digits="9" * 10).control_value == 0
    assert Token(op="t", digits="9" * 11).control_value == 0


def test_nine_digit_literal_is_kept() -> None:
    assert Token(op="t", digits="9" * 9).control_value == 999_999_999
