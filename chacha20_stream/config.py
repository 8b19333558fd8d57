# "expand 32-byte k"
SIGMA = (0x61707865, 0x3320646e, 0x79622d32, 0x6b206574)

KEY_SIZE = 32
NONCE_SIZE = 12
BLOCK_SIZE = 64
STATE_WORDS = 16

# position of the block counter inside the state
COUNTER_INDEX = 12

WORD_MASK = 0xFFFFFFFF

DEFAULT_ROUNDS = 20
SUPPORTED_ROUNDS = (8, 12, 20)

