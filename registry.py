# ==========================================================
# 🧭 registry.py
# Register: "I own topic T, find me at A."
# Resolve:  "Who owns topic T right now?"
# All the domain logic lives here. The store just holds bytes.
# ==========================================================
import ipaddress

from loguru import logger
from pydantic import BaseModel

from directory_store import DirectoryStore, StoreReadError, StoreWriteError

SEPARATOR = "|"
MIN_PORT = 1
MAX_PORT = 65535


# ============================
# 💥 Service Errors
# ============================
class RegistryError(Exception):
    """
    💥 Base class for registry failures.

    ``message`` is the short, public-safe text handed back to callers.
    """

    message = "registry error"

    def __init__(self, message: str | None = None):
        if message is not None:
            self.message = message
        super().__init__(self.message)


class InvalidInput(RegistryError):
    """🙅 The request broke a precondition."""

    message = "invalid input"


class TopicNotFound(RegistryError):
    """👻 Nobody ever registered this topic."""

    message = "topic not found"


class CorruptRecord(RegistryError):
    """🧟 Something is stored, but it isn't an owner record we can read."""

    message = "bad data for mothership entry"


class DirectoryUnavailable(RegistryError):
    """🔌 The store failed. Try again later."""

    message = "directory unavailable"


# ============================
# 📦 Owner Records
# ============================
class OwnerRecord(BaseModel):
    """
    📦 Who owns a topic and where to reach them.

    Attributes:
        address (str): host:port the owning node listens on.
        node_id (str): Opaque id of the owning node instance.
    """
    address: str
    node_id: str

    def encode(self) -> bytes:
        """Stored as ``address|node_id``. No escaping, so neither side may hold a pipe."""
        return f"{self.address}{SEPARATOR}{self.node_id}".encode("utf-8")

    @classmethod
    def decode(cls, raw: bytes) -> "OwnerRecord":
        """
        🔓 Parses stored bytes back into a record.

        Raises:
            CorruptRecord: Not UTF-8, or not exactly two non-empty pipe-separated parts.
        """
        try:
            text = raw.decode("utf-8")
        except UnicodeDecodeError as e:
            raise CorruptRecord() from e

        parts = text.split(SEPARATOR)
        if len(parts) != 2 or not all(parts):
            raise CorruptRecord()

        address, node_id = parts
        return cls(address=address, node_id=node_id)


class Resolution(BaseModel):
    """🎯 Answer to a resolve: the owner plus the topic that was asked about."""
    address: str
    node_id: str
    topic: str


def format_address(host: str, port: int) -> str:
    """
    🔌 Glue a host and port together.

    IPv6 literals get brackets, otherwise "::1:9000" is anyone's guess.
    """
    try:
        if ipaddress.ip_address(host).version == 6:
            return f"[{host}]:{port}"
    except ValueError:
        pass  # a hostname, leave it alone
    return f"{host}:{port}"


# ============================
# 🧭 The Registry Service
# ============================
class RegistryService:
    """
    🧭 Register and resolve topic owners against a shared DirectoryStore.

    Holds a borrowed reference to the store and nothing else: no cache,
    no locks, no retries. Every resolve is a fresh read, so answers always
    reflect the latest completed register. Concurrent registers for the
    same topic race and the store's last commit wins.
    """

    def __init__(self, store: DirectoryStore):
        self.store = store

    def register(self, topic: str, caller_port: int, caller_host: str | None, node_id: str) -> OwnerRecord:
        """
        🚪 Claims (or re-claims) a topic for the calling node.

        The host comes from the transport layer, never from the caller's
        payload. Only the port and node id are caller-supplied.

        Args:
            topic (str): Topic being claimed.
            caller_port (int): Port the node says it listens on.
            caller_host (str | None): Source host observed on the connection.
            node_id (str): The node's self-reported id.

        Returns:
            OwnerRecord: What got stored.

        Raises:
            InvalidInput: A precondition failed.
            DirectoryUnavailable: The store write failed. Not retried.
        """
        if not topic:
            raise InvalidInput("topic_name must not be empty")
        if not node_id:
            raise InvalidInput("node_id must not be empty")
        if isinstance(caller_port, bool) or not isinstance(caller_port, int) \
                or not MIN_PORT <= caller_port <= MAX_PORT:
            raise InvalidInput(f"node_port must be between {MIN_PORT} and {MAX_PORT}")
        if not caller_host:
            raise InvalidInput("unable to determine caller address")

        record = OwnerRecord(address=format_address(caller_host, caller_port), node_id=node_id)
        if SEPARATOR in record.address or SEPARATOR in record.node_id:
            raise InvalidInput(f"node_id and address must not contain '{SEPARATOR}'")

        encoded = record.encode()
        try:
            previous = self.store.put(topic.encode("utf-8"), encoded)
        except StoreWriteError as e:
            logger.error("❌ failed to insert into mothership db | topic_name={} error={}", topic, e)
            raise DirectoryUnavailable() from e

        if previous is not None:
            try:
                logger.info(
                    "🔄 node location updated | topic_name={} previous={} new={}",
                    topic, previous.decode("utf-8"), encoded.decode("utf-8"),
                )
            except UnicodeDecodeError:
                logger.warning(
                    "⚠️ replaced an undecodable record | topic_name={} previous={!r}",
                    topic, previous,
                )

        logger.info(
            "🆕 successfully registered node with mothership | node_id={} node_address={} topic_name={}",
            record.node_id, record.address, topic,
        )
        return record

    def resolve(self, topic: str) -> Resolution:
        """
        🔍 Who owns ``topic`` right now?

        Raises, in priority order:
            DirectoryUnavailable: The store read failed.
            TopicNotFound: Nothing stored for this topic.
            CorruptRecord: Stored value can't be decoded.
        """
        if not topic:
            raise InvalidInput("topic_name must not be empty")

        try:
            raw = self.store.get(topic.encode("utf-8"))
        except StoreReadError as e:
            logger.error("❌ failed to read from mothership db | topic_name={} error={}", topic, e)
            raise DirectoryUnavailable() from e

        if raw is None:
            raise TopicNotFound()

        try:
            record = OwnerRecord.decode(raw)
        except CorruptRecord:
            logger.error("🧟 bad data in mothership entry | topic_name={} node_data={!r}", topic, raw)
            raise

        return Resolution(address=record.address, node_id=record.node_id, topic=topic)

    def topic_count(self) -> int:
        """🧮 Number of registered topics."""
        try:
            return self.store.count()
        except StoreReadError as e:
            raise DirectoryUnavailable() from e
