from typing import Iterable, List

from app.shared.errors import BadRequest

DELIMITER = ","


def encode_token_ids(token_ids: Iterable[int]) -> str:
    return DELIMITER.join(str(int(token_id)) for token_id in token_ids)


def decode_token_ids(encoded: str) -> List[int]:
    """
    Decode "5,9999,7" into [5, 9999, 7], keeping order and duplicates.
    """
    if not encoded:
        return []
    token_ids = []
    for part in encoded.split(DELIMITER):
        part = part.strip()
        try:
            token_ids.append(int(part))
        except ValueError:
            raise BadRequest(f"Invalid tokenId in encoded list: '{part}'")
    return token_ids
