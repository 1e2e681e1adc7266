"""Conversion between stored files and entities.

Entities are stored as pretty-printed JSON, one file per entity. The
repository is version-controlled, so the output format is kept stable and
diff-friendly: two-space indentation, insertion-ordered keys, unescaped
unicode.
"""

import base64
import binascii
import json

from src.gitlab_client.errors import DecodeError
from src.gitlab_client.models import FileRecord

from .models import Entity

TEXT_ENCODINGS = {'text', 'utf-8', 'utf8'}


class EntityCodec:
    """Decodes FileRecords into entities and encodes entities into file text.

    The entity id is always the file path. An id stored inside the file is
    ignored.
    """

    @classmethod
    def decode(cls, record: FileRecord) -> Entity:
        """Decode a fetched file into an entity.

        Args:
            record: File as returned by the store client

        Returns:
            Parsed JSON object with "id" set to record.path

        Raises:
            DecodeError: If the transfer encoding, UTF-8 or JSON is invalid,
                or the JSON document is not an object
        """
        raw = cls._decode_transfer(record)

        try:
            text = raw.decode('utf-8')
        except UnicodeDecodeError as e:
            raise DecodeError(record.path, f"content is not UTF-8: {e}") from e

        try:
            payload = json.loads(text)
        except json.JSONDecodeError as e:
            raise DecodeError(record.path, f"invalid JSON: {e}") from e

        if not isinstance(payload, dict):
            raise DecodeError(
                record.path,
                f"expected a JSON object, got {type(payload).__name__}"
            )

        return {**payload, 'id': record.path}

    @classmethod
    def encode(cls, entity: Entity) -> str:
        """Serialize an entity to pretty-printed JSON text."""
        return json.dumps(entity, indent=2, ensure_ascii=False)

    @staticmethod
    def _decode_transfer(record: FileRecord) -> bytes:
        encoding = (record.encoding or '').lower()
        if encoding == 'base64':
            try:
                return base64.b64decode(record.content, validate=True)
            except (binascii.Error, ValueError) as e:
                raise DecodeError(record.path, f"invalid base64 content: {e}") from e
        if encoding in TEXT_ENCODINGS:
            return record.content.encode('utf-8')
        raise DecodeError(record.path, f"unsupported encoding '{record.encoding}'")
