from hnradar.tui.reflow import html_to_text, reflow, strip_html


def test_html_to_text_splits_paragraphs():
    html = "It&#x27;s the first<p>Second one"
    assert html_to_text(html) == "It's the first\n\nSecond one"


def test_html_to_text_empty():
    assert html_to_text("") == ""


def test_strip_html_decodes_entities():
    assert strip_html("Show HN: A &lt;tiny&gt; <i>editor</i>") == "Show HN: A <tiny> editor"


def test_reflow_wraps_to_width():
    lines = reflow("one two three four five six", 10)
    assert lines == ["one two", "three four", "five six"]
    assert all(len(line) <= 10 for line in lines)


def test_reflow_keeps_paragraph_breaks():
    lines = reflow("alpha<p>beta", 40)
    assert lines == ["alpha", "", "beta"]


def test_reflow_without_width_does_not_wrap():
    text = "word " * 30
    assert reflow(text, 0) == [text.strip()]


def test_reflow_empty_text_is_one_line():
    assert reflow("", 20) == [""]
