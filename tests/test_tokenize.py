import sys
import unittest
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from jobfit.normalize.tokenize import (  # noqa: E402
    STOPWORDS,
    phrase_in_tokens,
    simple_stem,
    token_set,
    tokenize_text,
)


class TokenizeTests(unittest.TestCase):
    def test_lowercases_strips_punctuation_and_stems(self):
        self.assertEqual(tokenize_text("The Developers are testing APIs!"), ["developer", "test", "apis"])

    def test_er_suffix_is_never_stripped(self):
        self.assertEqual(simple_stem("developer"), "developer")
        self.assertEqual(simple_stem("manager"), "manager")

    def test_german_suffixes(self):
        self.assertEqual(simple_stem("entwicklung"), "entwickl")
        self.assertEqual(tokenize_text("Die Entwicklung und das Testen"), ["entwickl", "test"])

    def test_short_words_are_not_stemmed(self):
        self.assertEqual(simple_stem("team"), "team")
        self.assertEqual(simple_stem("uses"), "uses")

    def test_tokens_are_deduplicated(self):
        self.assertEqual(tokenize_text("react React REACT"), ["react"])

    def test_degenerate_input_yields_no_tokens(self):
        self.assertEqual(tokenize_text(""), [])
        self.assertEqual(tokenize_text("   \n\t"), [])
        self.assertEqual(tokenize_text(None), [])
        self.assertEqual(tokenize_text("go to js"), [])

    def test_normalization_is_idempotent_and_stopword_free(self):
        text = "We are looking for an experienced Python developer with SQL and Docker skills."
        first = token_set(text)
        second = token_set(text)
        self.assertEqual(first, second)
        for token in first:
            self.assertEqual(token, token.lower())
            self.assertNotIn(token, STOPWORDS)
            self.assertGreaterEqual(len(token), 3)

    def test_phrase_in_tokens_uses_normalized_parts(self):
        tokens = frozenset({"data", "pipelin", "python"})
        self.assertTrue(phrase_in_tokens("data pipeline", tokens))
        self.assertTrue(phrase_in_tokens("python", tokens))
        self.assertFalse(phrase_in_tokens("data processing", tokens))
        self.assertFalse(phrase_in_tokens("js", tokens))
        self.assertFalse(phrase_in_tokens("", tokens))


if __name__ == "__main__":
    unittest.main()
