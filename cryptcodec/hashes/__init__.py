from .base import CryptScheme
from .md5 import Md5Crypt, md5_crypt
from .sha1 import Sha1Crypt, sha1_crypt

__all__ = ["CryptScheme", "Md5Crypt", "md5_crypt", "Sha1Crypt", "sha1_crypt"]
