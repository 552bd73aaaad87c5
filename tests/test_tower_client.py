from imtower.tower_client import block_color, share_message, BLOCK_COLORS, PLACED_FALLBACK


def test_known_tags_have_colours():
    for tag, color in BLOCK_COLORS.items():
        assert block_color(tag, PLACED_FALLBACK) == color


def test_unknown_or_missing_tag_uses_fallback():
    assert block_color(None, (1, 2, 3)) == (1, 2, 3)
    assert block_color("mystery", (1, 2, 3)) == (1, 2, 3)


def test_share_message_mentions_floor_count():
    assert "17층" in share_message(17)
