"""Document shown when nothing was saved, or after the user cancels."""

DEFAULT_VALUE = {
    "document": {
        "key": "default",
        "nodes": [
            {
                "key": "default-title",
                "type": "heading-one",
                "nodes": [
                    {"key": "default-title-text", "text": "Welcome", "marks": []},
                ],
            },
            {
                "key": "default-intro",
                "type": "paragraph",
                "nodes": [
                    {"key": "default-intro-text-1", "text": "This is editable ", "marks": []},
                    {"key": "default-intro-text-2", "text": "rich", "marks": [{"type": "bold"}]},
                    {"key": "default-intro-text-3", "text": " text, ", "marks": []},
                    {"key": "default-intro-text-4", "text": "much", "marks": [{"type": "italic"}]},
                    {"key": "default-intro-text-5", "text": " better than a plain textarea.", "marks": []},
                ],
            },
            {
                "key": "default-quote",
                "type": "block-quote",
                "nodes": [
                    {"key": "default-quote-text", "text": "A wise quote.", "marks": []},
                ],
            },
            {
                "key": "default-hint",
                "type": "paragraph",
                "nodes": [
                    {
                        "key": "default-hint-text",
                        "text": "Try it out for yourself! Drop or paste an image to embed it.",
                        "marks": [],
                    },
                ],
            },
        ],
    }
}
