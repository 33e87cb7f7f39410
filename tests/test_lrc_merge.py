from lrcfinder.core.lrc import merge_lyrics, merge_parsed, parse_lyrics


def test_merge_interleaves_translation_after_original():
    original = {"[00:01.000]": "hello", "[00:02.000]": "world"}
    translated = {"[00:01.000]": "你好", "[00:02.000]": "世界"}
    assert merge_lyrics(original, translated) == (
        "[00:01.000]hello\n"
        "[00:01.000]你好\n"
        "[00:02.000]world\n"
        "[00:02.000]世界\n"
    )


def test_merge_preamble_first_and_in_order():
    merged = merge_lyrics({"[00:01.000]": "a"}, {}, ["[ti:x]", "credits", "[ar:y]"])
    assert merged.splitlines() == ["[ti:x]", "credits", "[ar:y]", "[00:01.000]a"]


def test_merge_keeps_blank_preamble_line():
    original = parse_lyrics("title line\n\ncredits\n[00:01.00]a\n")
    assert merge_parsed(original) == "title line\n\ncredits\n[00:01.000]a\n"


def test_merge_sorted_union_of_timestamps():
    original = {"[01:00.000]": "late", "[00:05.000]": "early"}
    translated = {"[00:30.000]": "only translated"}
    lines = merge_lyrics(original, translated).splitlines()
    assert lines == [
        "[00:05.000]early",
        "[00:30.000]",
        "[00:30.000]only translated",
        "[01:00.000]late",
    ]
    stamps = [line[:11] for line in lines]
    assert stamps == sorted(stamps)


def test_merge_skips_empty_translation():
    original = {"[00:01.000]": "a", "[00:02.000]": ""}
    translated = {"[00:01.000]": "", "[00:02.000]": "b"}
    assert merge_lyrics(original, translated).splitlines() == [
        "[00:01.000]a",
        "[00:02.000]",
        "[00:02.000]b",
    ]


def test_merge_parsed_uses_original_preamble_only():
    original = parse_lyrics("作曲 : x\n[00:01.00]a")
    translated = parse_lyrics("by: translator\n[00:01.00]A")
    assert merge_parsed(original, translated) == "作曲 : x\n[00:01.000]a\n[00:01.000]A\n"
    assert merge_parsed(original) == "作曲 : x\n[00:01.000]a\n"


def test_merge_empty_inputs():
    assert merge_lyrics({}, {}) == ""
