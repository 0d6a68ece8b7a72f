"""
Default lexical resources: stop-words per language and part-of-speech availability.
"""
import logging
from typing import Dict, Iterable, List, Optional

from sklearn.feature_extraction.text import ENGLISH_STOP_WORDS

logger = logging.getLogger(__name__)

BUILTIN_STOP_WORDS: Dict[str, List[str]] = {
    "en": sorted(ENGLISH_STOP_WORDS),
    "fr": ["au", "aux", "avec", "ce", "ces", "dans", "de", "des", "du", "elle", "en", "et", "eux",
           "il", "je", "la", "le", "les", "leur", "lui", "ma", "mais", "me", "mes", "moi", "mon",
           "ne", "nos", "notre", "nous", "on", "ou", "par", "pas", "pour", "qu", "que", "qui", "sa",
           "se", "ses", "son", "sur", "ta", "te", "tes", "toi", "ton", "tu", "un", "une", "vos",
           "votre", "vous"],
    "es": ["a", "al", "algo", "con", "de", "del", "el", "ella", "en", "es", "esta", "este", "ha",
           "la", "las", "le", "lo", "los", "me", "mi", "muy", "no", "nos", "o", "para", "pero",
           "por", "que", "se", "si", "sin", "su", "sus", "te", "tu", "un", "una", "y", "ya", "yo"],
    "pt": ["a", "ao", "com", "como", "da", "das", "de", "do", "dos", "e", "ela", "ele", "em", "era",
           "eu", "isso", "já", "lhe", "mais", "mas", "me", "meu", "minha", "na", "não", "no", "nos",
           "o", "os", "ou", "para", "pela", "pelo", "por", "que", "se", "sem", "seu", "sua", "um",
           "uma", "você"],
    "de": ["aber", "als", "am", "an", "auch", "auf", "aus", "bei", "bin", "bis", "da", "das", "dass",
           "dem", "den", "der", "die", "du", "ein", "eine", "er", "es", "für", "hat", "ich", "ihr",
           "im", "in", "ist", "ja", "kein", "mit", "nicht", "noch", "nur", "oder", "sie", "so",
           "und", "von", "was", "wie", "wir", "zu"],
}


class DefaultLexicalResources:
    """
    Stop-words come from built-in lists, or from a file for one language.

    :param pos_languages: Languages for which part-of-speech tagging is available.
    :type pos_languages: Iterable[str]
    :param stop_words_file: Path to a text file containing stopwords, one per line.
    :type stop_words_file: str, optional
    :param stop_words_language: The language ``stop_words_file`` applies to.
    :type stop_words_language: str, optional
    """

    def __init__(self, pos_languages: Iterable[str] = (),
                 stop_words_file: Optional[str] = None,
                 stop_words_language: Optional[str] = None):
        self.pos_languages = set(pos_languages)
        self._stop_words = {lang: list(words) for lang, words in BUILTIN_STOP_WORDS.items()}
        if stop_words_file is not None:
            if stop_words_language is None:
                raise ValueError("stop_words_language is required along with stop_words_file.")
            self._stop_words[stop_words_language] = self._read_stop_words(stop_words_file)

    @staticmethod
    def _read_stop_words(path: str) -> List[str]:
        with open(path, "r", encoding="utf-8") as f:
            words = [w.strip() for w in f.read().split("\n")]
        words = list(dict.fromkeys(w for w in words if w))
        logger.info(f"Loaded {len(words)} stop words from {path}.")
        return words

    def get_stop_words(self, language: str) -> List[str]:
        words = self._stop_words.get(language)
        if words is None:
            logger.warning(f"No stop words available for language '{language}'.")
            return []
        return list(words)

    def is_pos_available(self, language: str) -> bool:
        return language in self.pos_languages
