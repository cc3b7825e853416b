from typing import Union

from charset_normalizer import from_bytes


def decode_body(body: Union[bytes, bytearray, str]) -> str:
    """Best-effort text for a fetched page; undecodable bytes are dropped."""
    if isinstance(body, (bytes, bytearray)):
        if not body:
            return ""
        res = from_bytes(bytes(body)).best()
        if res is None:
            return bytes(body).decode("utf-8", errors="ignore")
        return str(res)
    return str(body)
