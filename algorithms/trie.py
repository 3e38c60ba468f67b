"""
trie.py — Prefix Tree
======================
Word insertion and prefix search (autocomplete).

Words are stripped and lower-cased before they touch the trie.  Prefix
search walks to the prefix node, then collects every terminal
descendant depth-first; the suggestions are sorted and capped at
MAX_SUGGESTIONS.  An empty prefix suggests nothing.
"""

from typing import Any, Dict, List, Optional

from algorithms.inputs import as_str, require
from algorithms.step import StepKind
from engine.errors import InvalidInput


MAX_SUGGESTIONS = 10

INSERT_PSEUDOCODE: List[str] = [
    "node ← root",
    "for ch in word:",
    "    if ch not in node.children: node.children[ch] ← new node",
    "    node ← node.children[ch]",
    "node.end ← True",
]

SEARCH_PSEUDOCODE: List[str] = [
    "node ← root",
    "for ch in prefix:",
    "    if ch not in node.children: return []",
    "    node ← node.children[ch]",
    "return first 10 words below node, in order",
]

SAMPLE_WORDS: List[str] = [
    "apple", "application", "apply", "appreciate", "approach",
    "banana", "band", "bandana", "bank", "banner",
    "cat", "car", "card", "care", "careful", "carry",
    "dog", "door", "down", "download", "dragon",
    "elephant", "email", "empty", "end", "energy",
    "fire", "fish", "flag", "flower", "food",
    "game", "garden", "gate", "gift", "girl",
    "house", "happy", "heart", "help", "home",
]


class TrieNode:
    __slots__ = ("children", "is_end")

    def __init__(self):
        self.children: Dict[str, "TrieNode"] = {}
        self.is_end:   bool                  = False


class Trie:
    def __init__(self, words: Optional[List[str]] = None):
        self.root  = TrieNode()
        self.words: List[str] = []
        for word in words or []:
            self.add(word)

    def add(self, word: str) -> bool:
        """Silent insert.  False if the word was already present."""
        word = normalise(word)
        if not word or word in self.words:
            return False
        node = self.root
        for ch in word:
            node = node.children.setdefault(ch, TrieNode())
        node.is_end = True
        self.words.append(word)
        return True

    def find_node(self, prefix: str) -> Optional[TrieNode]:
        node = self.root
        for ch in prefix:
            node = node.children.get(ch)
            if node is None:
                return None
        return node

    def to_dict(self) -> Dict[str, Any]:
        def walk(node: TrieNode) -> Dict[str, Any]:
            return {"end": node.is_end, "children": {ch: walk(c) for ch, c in node.children.items()}}
        return walk(self.root)


def normalise(word: str) -> str:
    return word.strip().lower()


def _prepare_trie(data: Dict[str, Any]) -> Trie:
    words = data.get("words", [])
    if not isinstance(words, list):
        raise InvalidInput("words must be a list of strings")
    return Trie([as_str(w, "word") for w in words])


def prepare_insert(data: Dict[str, Any]) -> Dict[str, Any]:
    word = normalise(as_str(require(data, "word"), "word"))
    if not word:
        raise InvalidInput("word must not be empty")
    return {"trie": _prepare_trie(data), "word": word}


def prepare_search(data: Dict[str, Any]) -> Dict[str, Any]:
    return {"trie": _prepare_trie(data), "prefix": normalise(as_str(data.get("prefix", ""), "prefix"))}


# ---------------------------------------------------------------------------
# Insert
# ---------------------------------------------------------------------------
def trie_insert(trie: Trie, word: str, emit):
    yield emit(StepKind.START, f'Insert "{word}".', word=word)

    if word in trie.words:
        yield emit.final(StepKind.FOUND, f'"{word}" is already in the trie.', word=word)
        return {"inserted": False, "words": sorted(trie.words)}

    node, path = trie.root, ""
    for ch in word:
        path += ch
        child = node.children.get(ch)
        if child is None:
            child = node.children[ch] = TrieNode()
            emit.count("nodes_created")
            yield emit(StepKind.INSERT, f"No child '{ch}' under \"{path[:-1]}\": create it.", char=ch, prefix=path)
        else:
            yield emit(StepKind.VISIT, f"Child '{ch}' exists: follow it.", char=ch, prefix=path)
        node = child

    node.is_end = True
    trie.words.append(word)
    yield emit.final(StepKind.DONE, f'Mark the node for "{word}" as the end of a word.',
                     word=word, trie=trie.to_dict())
    return {"inserted": True, "words": sorted(trie.words)}


# ---------------------------------------------------------------------------
# Prefix search
# ---------------------------------------------------------------------------
def trie_search(trie: Trie, prefix: str, emit):
    """Returns up to MAX_SUGGESTIONS words starting with `prefix`, sorted."""
    yield emit(StepKind.START, f'Autocomplete "{prefix}".', prefix=prefix)

    if not prefix:
        yield emit.final(StepKind.NOT_FOUND, "Empty prefix: no suggestions.", prefix=prefix, suggestions=[])
        return []

    node, path = trie.root, ""
    for ch in prefix:
        child = node.children.get(ch)
        if child is None:
            yield emit.final(StepKind.NOT_FOUND, f"No child '{ch}' after \"{path}\": no word has this prefix.",
                             prefix=path, missing=ch, suggestions=[])
            return []
        path += ch
        yield emit(StepKind.VISIT, f"Follow '{ch}'.", char=ch, prefix=path)
        node = child

    collected: List[str] = []
    yield from _collect(node, prefix, emit, collected)
    suggestions = sorted(collected)[:MAX_SUGGESTIONS]

    if not suggestions:
        yield emit.final(StepKind.NOT_FOUND, f'No complete word starts with "{prefix}".',
                         prefix=prefix, suggestions=[])
        return []
    yield emit.final(StepKind.FOUND, f"{len(collected)} word(s) found, showing {len(suggestions)}.",
                     prefix=prefix, suggestions=suggestions)
    return suggestions


def _collect(node: TrieNode, prefix: str, emit, collected: List[str]):
    if node.is_end:
        collected.append(prefix)
        emit.count("words_found")
        yield emit(StepKind.HIGHLIGHT, f'"{prefix}" is a complete word.', word=prefix)
    for ch, child in node.children.items():
        yield from _collect(child, prefix + ch, emit, collected)
