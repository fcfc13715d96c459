# tests/test_sha1_crypt.py
import dataclasses
import re
import pytest
from passlib.hash import sha1_crypt as reference

from cryptcodec.config import settings
from cryptcodec.exceptions import HashGenerationError, InvalidOptionError
from cryptcodec.hashes.sha1 import OFFSETS, Sha1Crypt, permute, sha1_crypt

HASH_RE = re.compile(r"\$sha1\$[0-9]+\$[./0-9A-Za-z]{0,64}\$[./0-9A-Za-z]{28}")

def test_fixture_matches_independent_implementation():
    opts = {"salt": "abcdef", "iteration_count": 1000}
    h = sha1_crypt.hash("correcthorse", opts)
    assert h.startswith("$sha1$1000$abcdef$")
    assert HASH_RE.fullmatch(h)
    assert h == sha1_crypt.hash("correcthorse", opts)
    assert h == "$sha1$1000$abcdef$wRi9JxoeVEWuhTEjOkhMJ7pRiE5c"
    assert h == reference.using(salt="abcdef", rounds=1000).hash("correcthorse")

def test_hash_and_verify():
    codec = Sha1Crypt(iteration_count=50)
    h = codec.hash("correcthorse")
    assert codec.verify("correcthorse", h)
    assert not codec.verify("correcthorsE", h)
    assert reference.verify("correcthorse", h)

def test_verifies_hash_from_independent_implementation():
    h = reference.using(rounds=321).hash("s3cret")
    assert sha1_crypt.verify("s3cret", h)
    assert not sha1_crypt.verify("s3cre", h)

def test_empty_options_use_defaults():
    h = sha1_crypt.hash("pw", {})
    assert h.startswith(f"$sha1${settings.SHA1_CRYPT_ITERATIONS}$")
    assert HASH_RE.fullmatch(h)
    assert sha1_crypt.verify("pw", h)

def test_gen_config_explicit_options():
    opts = {"iteration_count": 1000, "salt": "abcdef"}
    assert sha1_crypt.gen_config(opts) == "$sha1$1000$abcdef$"
    assert sha1_crypt.gen_config(opts) == sha1_crypt.gen_config(opts)

def test_default_salt_is_random():
    a, b = sha1_crypt.gen_config(), sha1_crypt.gen_config()
    assert a != b
    assert len(a) == len(b)

@pytest.mark.parametrize("count", [1, "1", 4294967295])
def test_iteration_count_accepted(count):
    assert sha1_crypt.gen_config({"iteration_count": count, "salt": "x"}) == f"$sha1${int(count)}$x$"

@pytest.mark.parametrize("count", [0, 4294967296, -5, 1.5, "1.5", "abc"])
def test_iteration_count_rejected(count):
    with pytest.raises(InvalidOptionError):
        sha1_crypt.gen_config({"iteration_count": count})

def test_iteration_count_log2():
    assert sha1_crypt.gen_config({"iteration_count_log2": 10, "salt": "s"}) == "$sha1$1024$s$"
    assert sha1_crypt.gen_config({"iterationCountLog2": 31, "salt": "s"}) == "$sha1$2147483648$s$"
    for bad in (32, -1, "x"):
        with pytest.raises(InvalidOptionError):
            sha1_crypt.gen_config({"iteration_count_log2": bad})

def test_salt_option():
    assert sha1_crypt.gen_config({"salt": "a" * 64, "iterationcount": 3}) == f"$sha1$3${'a' * 64}$"
    with pytest.raises(InvalidOptionError):
        sha1_crypt.gen_config({"salt": "a" * 65})
    with pytest.raises(InvalidOptionError):
        sha1_crypt.gen_config({"salt": "a_b"})

def test_empty_salt():
    h = sha1_crypt.hash("pw", {"salt": "", "iteration_count": 5})
    assert h.startswith("$sha1$5$$")
    assert sha1_crypt.verify("pw", h)

def test_round_text_kept_as_written():
    h = sha1_crypt.gen_hash("pw", "$sha1$0005$abc$")
    assert h.startswith("$sha1$0005$abc$")
    assert sha1_crypt.verify("pw", h)
    assert h[-28:] != sha1_crypt.gen_hash("pw", "$sha1$5$abc$")[-28:]

def test_config_without_trailing_separator():
    assert sha1_crypt.gen_hash("pw", "$sha1$5$abc") == sha1_crypt.gen_hash("pw", "$sha1$5$abc$")

def test_bytes_and_str_passwords_agree():
    cfg = "$sha1$7$salt$"
    assert sha1_crypt.gen_hash(b"p\xc3\xa4ss", cfg) == sha1_crypt.gen_hash("päss", cfg)

def test_permutation_table():
    assert permute(bytes(range(20))) == bytes(OFFSETS)
    assert len(OFFSETS) == 21 and OFFSETS.count(0) == 2 and 3 in OFFSETS

def test_gen_salt_from_raw_bytes():
    assert Sha1Crypt(iteration_count=7).gen_salt(b"\x00" * 6) == "$sha1$7$........$"

def test_sentinels():
    assert sha1_crypt.gen_hash("pw", "*0") == "*1"
    assert sha1_crypt.gen_hash("pw", "*1") == "*0"
    assert sha1_crypt.gen_hash("pw", "$sha1$0$abc$") == "*0"
    assert sha1_crypt.gen_hash("pw", "$sha1$4294967296$abc$") == "*0"
    assert sha1_crypt.gen_hash("pw", "$sha1$x$abc$") == "*0"
    assert sha1_crypt.gen_hash("pw", "$1$abc$") == "*0"

def test_compute_returns_tagged_result():
    ok = sha1_crypt.compute("pw", "$sha1$3$abc$")
    assert ok.ok and ok.render() == ok.encoded
    failed = sha1_crypt.compute("pw", "$sha1$$abc$")
    assert not failed.ok and failed.render() == "*0"

def test_raise_on_failure():
    strict = Sha1Crypt(iteration_count=10, raise_on_failure=True)
    with pytest.raises(HashGenerationError) as exc:
        strict.gen_hash("pw", "*0")
    assert exc.value.sentinel == "*1"
    assert not strict.verify("pw", "*0")

def test_verify_malformed_hash():
    assert not sha1_crypt.verify("pw", "$sha1$10$abc$tooshort")
    assert not sha1_crypt.verify("pw", "sha1$10$abc$")
    assert not sha1_crypt.verify("pw", None)

def test_tampered_checksum_fails():
    h = sha1_crypt.hash("pw", {"iteration_count": 4})
    tampered = h[:-1] + ("." if h[-1] != "." else "/")
    assert not sha1_crypt.verify("pw", tampered)

def test_grammar_checks():
    h = sha1_crypt.hash("pw", {"iteration_count": 2, "salt": "abc"})
    assert sha1_crypt.verify_hash(h)
    assert sha1_crypt.verify_salt(h)
    assert sha1_crypt.verify_salt("$sha1$2$abc$")
    assert not sha1_crypt.verify_hash("$sha1$2$abc$")
    assert not sha1_crypt.verify_salt("$sha1$2$ab!$")
    assert not sha1_crypt.verify_hash(h + "\n")

def test_parse():
    cfg = sha1_crypt.parse("$sha1$1000$abcdef$")
    assert cfg.scheme_id == "sha1"
    assert cfg.cost_params == (1000,)
    assert cfg.salt == "abcdef"
    assert cfg.render() == "$sha1$1000$abcdef$"
    with pytest.raises(ValueError):
        sha1_crypt.parse("$1$abc$")

def test_codec_is_immutable():
    codec = Sha1Crypt(iteration_count=10)
    faster = codec.using(iteration_count=5)
    assert faster.iteration_count == 5
    assert codec.iteration_count == 10
    assert codec.using(iterationCountLog2=3).iteration_count == 8
    with pytest.raises(dataclasses.FrozenInstanceError):
        codec.iteration_count = 20
    with pytest.raises(InvalidOptionError):
        Sha1Crypt(iteration_count=0)
    with pytest.raises(InvalidOptionError):
        codec.using(iteration_count=4294967296)

def test_needs_rehash():
    codec = Sha1Crypt(iteration_count=10)
    assert not codec.needs_rehash(codec.hash("pw"))
    assert codec.needs_rehash(codec.hash("pw", {"iteration_count": 11}))
    assert codec.needs_rehash("*0")

def test_default_rounds_come_from_settings(monkeypatch):
    from cryptcodec.config import Settings
    from cryptcodec.hashes import sha1 as module

    monkeypatch.setattr(module, "settings", Settings(SHA1_CRYPT_ITERATIONS=77))
    assert Sha1Crypt().iteration_count == 77
    assert Sha1Crypt().gen_config({"salt": "a"}) == "$sha1$77$a$"

def test_oversized_round_field():
    stored = "$sha1$" + "1" * 5000 + "$abc$" + "." * 28
    assert sha1_crypt.verify_hash(stored)
    assert not sha1_crypt.verify("pw", stored)
    assert sha1_crypt.needs_rehash(stored)
    assert sha1_crypt.gen_hash("pw", stored) == "*0"
    with pytest.raises(ValueError):
        sha1_crypt.parse(stored)
    assert not sha1_crypt.verify("pw", "$sha1$" + "0" * 5000 + "5$abc$" + "." * 28)

def test_unencodable_password_does_not_verify():
    h = sha1_crypt.hash("pw", {"iteration_count": 3})
    assert not sha1_crypt.verify("\ud800", h)
    with pytest.raises(UnicodeEncodeError):
        sha1_crypt.gen_hash("\ud800", h)
