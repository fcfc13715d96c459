"""Crypt-style password hash codecs: md5_crypt ($1$) and sha1_crypt ($sha1$)."""
from .context import CryptContext, default_context, identify, needs_rehash, verify
from .exceptions import CryptCodecError, HashGenerationError, InvalidEncodingError, InvalidOptionError
from .hashes import CryptScheme, Md5Crypt, Sha1Crypt, md5_crypt, sha1_crypt
from .results import FAILED, FAILED_TWICE, Failed, Hashed, is_sentinel
from .schemas import HashConfig
from .utils.encoding import decode64, encode64

__version__ = "0.1.0"
