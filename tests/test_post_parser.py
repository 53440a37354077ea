from deepfolio.post_parser import parse_posts


def test_dated_lines():
    posts = parse_posts("2024-07-26: Launched project X\n2024-06-15: Got certified")
    assert [(p.date, p.text) for p in posts] == [
        ("2024-07-26", "Launched project X"),
        ("2024-06-15", "Got certified"),
    ]


def test_undated_line_keeps_whole_text():
    posts = parse_posts("Just shipped a feature")
    assert len(posts) == 1
    assert posts[0].date == "unknown"
    assert posts[0].text == "Just shipped a feature"


def test_blank_lines_are_dropped():
    raw = "\n   \n2024-01-02: first\n\t\n\nsecond one\n   "
    posts = parse_posts(raw)
    assert [p.text for p in posts] == ["first", "second one"]


def test_surrounding_whitespace_and_no_space_after_colon():
    posts = parse_posts("   2023-12-31:Wrapped up the year   ")
    assert posts[0].date == "2023-12-31"
    assert posts[0].text == "Wrapped up the year"


def test_date_with_empty_text_is_dropped():
    assert parse_posts("2024-07-26:\n2024-07-27:    ") == []


def test_malformed_dates_fall_back_to_unknown():
    posts = parse_posts("24-07-26: short year\n2024/07/26: slashes\nOn 2024-07-26: mid-line")
    assert all(p.date == "unknown" for p in posts)
    assert posts[0].text == "24-07-26: short year"


def test_empty_input():
    assert parse_posts("") == []
    assert parse_posts(None) == []


def test_only_ascii_digits_form_a_date():
    posts = parse_posts("٢٠٢٤-٠١-٠١: arabic digits")
    assert posts[0].date == "unknown"
    assert posts[0].text == "٢٠٢٤-٠١-٠١: arabic digits"


def test_only_newlines_separate_posts():
    posts = parse_posts("2024-01-01: a\x0cb\r\n2024-01-02: c d")
    assert [(p.date, p.text) for p in posts] == [
        ("2024-01-01", "a\x0cb"),
        ("2024-01-02", "c d"),
    ]
