from release_tracker.utils.html_utils import rendered_text, sanitize_html


def test_sanitize_html_strips_tags_and_decodes_entities():
    assert sanitize_html("<p>Hello &amp; <b>world</b></p>") == "Hello & world"
    assert sanitize_html("") == ""


def test_rendered_text_accepts_wordpress_fields():
    assert rendered_text({'rendered': 'Hades &#8211; GOG'}) == "Hades – GOG"
    assert rendered_text("<em>Celeste</em>") == "Celeste"


def test_rendered_text_of_missing_field_is_empty():
    assert rendered_text(None) == ""
    assert rendered_text({'rendered': None}) == ""
    assert rendered_text(42) == ""
