import logging

from . import config
from .utils import rotl32, is_bytes_like, load_words_le, store_words_le

logger = logging.getLogger(__name__)

MASK = config.WORD_MASK


class ChaChaError(Exception):
    pass


class ValidationError(ChaChaError, ValueError):
    """Bad key, nonce, counter, round count or input data."""


def _check_bytes(name, value, size):
    if not is_bytes_like(value):
        raise ValidationError(f"{name} must be {size} bytes, got {type(value).__name__}")
    value = bytes(value)
    if len(value) != size:
        raise ValidationError(f"{name} must be {size} bytes, got {len(value)}")
    return value


def _check_counter(counter):
    if isinstance(counter, bool) or not isinstance(counter, int):
        raise ValidationError(f"counter must be an int, got {type(counter).__name__}")
    if not 0 <= counter <= MASK:
        raise ValidationError(f"counter must be in [0, 2**32), got {counter}")
    return counter


def _check_rounds(rounds):
    if rounds not in config.SUPPORTED_ROUNDS:
        raise ValidationError(f"rounds must be one of {config.SUPPORTED_ROUNDS}, got {rounds!r}")
    return rounds


def quarter_round(a, b, c, d):
    a = (a + b) & MASK; d = rotl32(d ^ a, 16)
    c = (c + d) & MASK; b = rotl32(b ^ c, 12)
    a = (a + b) & MASK; d = rotl32(d ^ a, 8)
    c = (c + d) & MASK; b = rotl32(b ^ c, 7)
    return a, b, c, d


def _initial_state(key, counter, nonce):
    state = list(config.SIGMA)
    state += load_words_le(key, 8)
    state.append(counter)
    state += load_words_le(nonce, 3)
    return state


def _mix(state, rounds):
    x = list(state)
    for _ in range(rounds // 2):
        # Column rounds
        x[0], x[4], x[8], x[12] = quarter_round(x[0], x[4], x[8], x[12])
        x[1], x[5], x[9], x[13] = quarter_round(x[1], x[5], x[9], x[13])
        x[2], x[6], x[10], x[14] = quarter_round(x[2], x[6], x[10], x[14])
        x[3], x[7], x[11], x[15] = quarter_round(x[3], x[7], x[11], x[15])
        # Diagonal rounds
        x[0], x[5], x[10], x[15] = quarter_round(x[0], x[5], x[10], x[15])
        x[1], x[6], x[11], x[12] = quarter_round(x[1], x[6], x[11], x[12])
        x[2], x[7], x[8], x[13] = quarter_round(x[2], x[7], x[8], x[13])
        x[3], x[4], x[9], x[14] = quarter_round(x[3], x[4], x[9], x[14])
    return [(x[i] + state[i]) & MASK for i in range(config.STATE_WORDS)]


def chacha20_block(key, counter, nonce, rounds=config.DEFAULT_ROUNDS):
    """Return the 64-byte keystream block for (key, counter, nonce)."""
    key = _check_bytes("key", key, config.KEY_SIZE)
    nonce = _check_bytes("nonce", nonce, config.NONCE_SIZE)
    state = _initial_state(key, _check_counter(counter), nonce)
    block = bytearray(config.BLOCK_SIZE)
    store_words_le(block, _mix(state, _check_rounds(rounds)))
    return bytes(block)


class ChaCha20:
    """
    Pure Python ChaCha20 stream cipher (RFC 7539: 256-bit key, 96-bit nonce,
    32-bit block counter).

    The engine is stateful. Keystream continues across calls, so a decryptor
    only recovers the plaintext when it is built with the same key, nonce and
    counter and fed the same sequence of call lengths as the encryptor.

    A (key, nonce) pair must never be used for two different streams. Nothing
    here detects reuse; the caller owns nonce uniqueness.

    Instances are not thread-safe.
    """
    def __init__(self, key: bytes, nonce: bytes, counter: int = 0, rounds: int = config.DEFAULT_ROUNDS):
        self._key = _check_bytes("key", key, config.KEY_SIZE)
        self._nonce = _check_bytes("nonce", nonce, config.NONCE_SIZE)
        counter = _check_counter(counter)
        self._rounds = _check_rounds(rounds)

        self.param = _initial_state(self._key, counter, self._nonce)
        self.keystream = bytearray(config.BLOCK_SIZE)
        # 0 means no block generated yet, 64 means the current block is used up
        self.cursor = 0

        logger.debug("ChaCha20 engine ready: rounds=%d, counter=%d", self._rounds, counter)

    @property
    def key(self) -> bytes:
        return self._key

    @property
    def nonce(self) -> bytes:
        return self._nonce

    @property
    def rounds(self) -> int:
        return self._rounds

    @property
    def counter(self) -> int:
        """Block counter the next generated block will use."""
        return self.param[config.COUNTER_INDEX]

    def block(self):
        """Regenerate `keystream` from the current state. Leaves the counter alone."""
        store_words_le(self.keystream, _mix(self.param, self._rounds))

    def _next_block(self):
        self.block()
        counter = (self.param[config.COUNTER_INDEX] + 1) & MASK
        if counter == 0:
            logger.warning("ChaCha20 block counter wrapped to 0, keystream will repeat")
        self.param[config.COUNTER_INDEX] = counter
        self.cursor = 0

    def _update(self, data):
        if not is_bytes_like(data):
            raise ValidationError(f"data must be bytes-like, got {type(data).__name__}")
        data = bytes(data)
        if not data:
            raise ValidationError("data must not be empty")

        output = bytearray(len(data))
        keystream = self.keystream
        for i in range(len(data)):
            if self.cursor == 0 or self.cursor == config.BLOCK_SIZE:
                self._next_block()
            output[i] = data[i] ^ keystream[self.cursor]
            self.cursor += 1

        return bytes(output)

    def encrypt(self, data: bytes) -> bytes:
        return self._update(data)

    def decrypt(self, data: bytes) -> bytes:
        return self._update(data)
