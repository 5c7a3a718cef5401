from typing import Optional

class Link:
    def __init__(self, uri: str, text: Optional[str] = None):
        self.uri = uri
        self.text = text

    def __eq__(self, other):
        if not isinstance(other, Link):
            return NotImplemented
        return (self.uri, self.text) == (other.uri, other.text)

    def __hash__(self):
        return hash((self.uri, self.text))

    def __repr__(self):
        return f"<Link url={self.uri} text={self.text!r}>"
