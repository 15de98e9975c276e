"""Word counting and map comparison.

Learn: These are the pure functions under the poller. No fixtures,
no I/O — just inputs and expected maps.
"""

from blogwords.words import Document, count_words, maps_equal, tokenize, top_words


# ═══════════════════════════════════════════════════════════
# Tokenizing + counting
# ═══════════════════════════════════════════════════════════


def test_tokenize_lowercases_and_splits_on_punctuation():
    assert tokenize("Hello, World! hello-world") == ["hello", "world", "hello", "world"]


def test_tokenize_drops_empty_tokens():
    assert tokenize("  ...  ,,, ") == []
    assert tokenize("") == []


def test_tokenize_keeps_digits_and_non_ascii_letters():
    assert tokenize("Über 2024 café_bar") == ["über", "2024", "café", "bar"]


def test_count_words_across_documents():
    freq = count_words(["the cat sat", "the cat ran"])
    assert freq == {"the": 2, "cat": 2, "sat": 1, "ran": 1}


def test_count_words_is_case_insensitive():
    assert count_words(["The THE the"]) == {"the": 3}


def test_count_words_empty_input():
    assert count_words([]) == {}


def test_count_words_is_deterministic():
    docs = [
        Document(title="A Post", body="Some words, some more words."),
        Document(title="Another", body="words again"),
    ]
    first = count_words(docs)
    second = count_words(docs)
    assert maps_equal(first, second)
    assert list(first) == list(second)


def test_count_words_uses_title_and_body():
    doc = Document(title="Big News", body="news travels")
    assert count_words([doc]) == {"big": 1, "news": 2, "travels": 1}


# ═══════════════════════════════════════════════════════════
# Documents from WordPress posts
# ═══════════════════════════════════════════════════════════


def test_document_from_wp_post_strips_html():
    post = {
        "id": 7,
        "title": {"rendered": "Tips &amp; Tricks"},
        "content": {"rendered": "<p>Learn<strong>fast</strong></p>\n<p>today</p>"},
    }
    doc = Document.from_wp_post(post)
    assert doc.id == 7
    assert doc.title == "Tips & Tricks"
    assert count_words([doc]) == {"tips": 1, "tricks": 1, "learn": 1, "fast": 1, "today": 1}


def test_document_drops_script_and_style_blocks():
    post = {
        "title": {"rendered": "hi"},
        "content": {
            "rendered": (
                "<style>.wp-block{color:red}</style><p>hello</p>"
                "<script type=\"text/javascript\">var x = 1;</script>"
                "<NOSCRIPT>enable js</NOSCRIPT> world"
            )
        },
    }
    assert count_words([Document.from_wp_post(post)]) == {"hi": 1, "hello": 1, "world": 1}


def test_document_from_wp_post_accepts_plain_strings_and_missing_fields():
    doc = Document.from_wp_post({"title": "Plain title"})
    assert doc.title == "Plain title"
    assert doc.body == ""
    assert doc.id is None


# ═══════════════════════════════════════════════════════════
# Equality
# ═══════════════════════════════════════════════════════════


def test_maps_equal_empty_maps():
    assert maps_equal({}, {})


def test_maps_equal_missing_key_is_not_zero():
    assert not maps_equal({"a": 1}, {"a": 1, "b": 0})
    assert not maps_equal({"a": 1, "b": 0}, {"a": 1})


def test_maps_equal_ignores_order():
    assert maps_equal({"a": 1, "b": 2}, {"b": 2, "a": 1})


def test_maps_equal_different_counts():
    assert not maps_equal({"a": 1}, {"a": 2})


def test_maps_equal_same_size_different_keys():
    assert not maps_equal({"a": 1}, {"b": 1})


def test_top_words_orders_by_count_then_first_seen():
    freq = {"b": 1, "a": 3, "c": 1, "d": 2}
    assert top_words(freq) == [("a", 3), ("d", 2), ("b", 1), ("c", 1)]
    assert top_words(freq, 2) == [("a", 3), ("d", 2)]
