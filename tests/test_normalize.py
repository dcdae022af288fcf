from vaka_kielet.core.normalize import normalize


def test_trims_lowercases_and_collapses_whitespace():
    assert normalize(" Helsinki  ") == normalize("helsinki") == "helsinki"
    assert normalize("KOKO   MAA") == "koko maa"
    assert normalize("\tMaarianhamina -\n Mariehamn ") == "maarianhamina - mariehamn"


def test_missing_input_is_empty_string():
    assert normalize(None) == ""
    assert normalize("") == ""
    assert normalize("   ") == ""


def test_non_string_input_is_stringified():
    assert normalize(123) == "123"


def test_no_break_space_counts_as_whitespace():
    assert normalize("Koko\u00a0 maa") == "koko maa"


def test_idempotent():
    for value in [" Helsinki  ", "ÄÄNEKOSKI", "Pedersören  kunta", "", "a  b"]:
        once = normalize(value)
        assert normalize(once) == once


def test_scandinavian_letters_are_lowercased():
    assert normalize("ÄHTÄRI") == "ähtäri"
    assert normalize("Närpiö") == "närpiö"
