import random

import pytest
from hypothesis import given, settings, strategies as st

from edconsensus.curve import L, decompress, scalar_from_hash
from edconsensus.errors import InvalidSignature, InvalidSliceLength, MalformedPublicKey
from edconsensus.keys import SigningKey, VerificationKey, VerificationKeyBytes
from edconsensus.signature import Signature

RFC8032_CASES = [
    (
        "9d61b19deffd5a60ba844af492ec2cc44449c5697b326919703bac031cae7f60",
        "d75a980182b10ab7d54bfed3c964073a0ee172f3daa62325af021a68f707511a",
        "e5564300c360ac729086e2cc806e828a84877f1eb8e5d974d873e065224901555fb8821590a33bacc61e39701cf9b46bd25bf5f0595bbe24655141438e7a100b",
        "",
    ),
    (
        "4ccd089b28ff96da9db6c346ec114e0f5b8a319f35aba624da8cf6ed4fb8a6fb",
        "3d4017c3e843895a92b70aa74d1b7ebc9c982ccf2ec4968cc0cd55f12af4660c",
        "92a009a9f0d4cab8720e820b5f642540a2b27b5416503f8fb3762223ebdb69da085ac1e43e15996e458f3613d0f11d8c387b2eaeb4302aeeb00d291612bb0c00",
        "72",
    ),
    (
        "c5aa8df43f9f837bedb7442f31dcb7b166d38535076f094b85ce3a2e0b4458f7",
        "fc51cd8e6218a1a38da47ed00230f0580816ed13ba3303ac5deb911548908025",
        "6291d657deec24024827e69c3abe01a30ce548a284743a445e3680d7db5ac3ac18ff9b538d16f290ae67f760984dc6594a7c15e9716ed28dc027beceea1ec40a",
        "af82",
    ),
]

IDENTITY_ENCODING = (1).to_bytes(32, "little")
IDENTITY_NONCANONICAL_SIGN = bytes([1] + [0] * 30 + [128])


@pytest.mark.parametrize("sk_hex, pk_hex, sig_hex, msg_hex", RFC8032_CASES)
def test_rfc8032(sk_hex, pk_hex, sig_hex, msg_hex):
    sk = SigningKey.from_bytes(bytes.fromhex(sk_hex))
    pk = VerificationKey.from_bytes(bytes.fromhex(pk_hex))
    sig = Signature.from_bytes(bytes.fromhex(sig_hex))
    msg = bytes.fromhex(msg_hex)

    assert pk.verify(sig, msg) is None
    assert sk.verification_key().a_bytes == pk.a_bytes
    assert sk.verification_key_bytes() == VerificationKeyBytes.from_bytes(bytes.fromhex(pk_hex))
    assert sk.sign(msg) == sig


def test_parsing_round_trip():
    sk = SigningKey.generate()
    pk = sk.verification_key()
    pkb = sk.verification_key_bytes()
    sig = sk.sign(b"test")

    sk2 = SigningKey.from_bytes(sk.to_bytes())
    pk2 = VerificationKey.from_bytes(pk.to_bytes())
    pkb2 = VerificationKeyBytes.from_bytes(pkb.to_bytes())
    sig2 = Signature.from_bytes(sig.to_bytes())

    assert sk2.to_bytes() == sk.to_bytes()
    assert pk2.to_bytes() == pk.to_bytes()
    assert pkb2.to_bytes() == pkb.to_bytes()
    assert sig2.to_bytes() == sig.to_bytes()
    assert bytes(sk2) == bytes(sk)
    assert bytes(pk2) == bytes(pkb2)


def test_sign_and_verify():
    sk = SigningKey.generate()
    pk = sk.verification_key()
    msg = b"ed25519-consensus test message"
    sig = sk.sign(msg)
    assert pk.verify(sig, msg) is None


def test_verify_rejects_other_message():
    sk = SigningKey.generate()
    sig = sk.sign(b"message")
    with pytest.raises(InvalidSignature):
        sk.verification_key().verify(sig, b"other message")


def test_verify_rejects_non_canonical_s():
    sk = SigningKey.generate()
    sig = sk.sign(b"m")
    s = int.from_bytes(sig.s_bytes, "little") + L
    bad = Signature(sig.r_bytes, s.to_bytes(32, "little"))
    with pytest.raises(InvalidSignature):
        sk.verification_key().verify(bad, b"m")


def test_verify_rejects_r_not_on_curve():
    bad_r = next(
        enc for enc in (i.to_bytes(32, "little") for i in range(2, 200)) if decompress(enc) is None
    )
    sk = SigningKey.generate()
    sig = sk.sign(b"m")
    with pytest.raises(InvalidSignature):
        sk.verification_key().verify(Signature(bad_r, sig.s_bytes), b"m")


def test_verify_prehashed_matches_verify():
    sk = SigningKey.generate()
    vk = sk.verification_key()
    sig = sk.sign(b"payload")
    k = scalar_from_hash(sig.r_bytes, vk.to_bytes(), b"payload")
    assert vk.verify_prehashed(sig, k) is None
    with pytest.raises(InvalidSignature):
        vk.verify_prehashed(sig, (k + 1) % L)


def test_malformed_public_key():
    bad = next(
        enc for enc in (i.to_bytes(32, "little") for i in range(2, 200)) if decompress(enc) is None
    )
    with pytest.raises(MalformedPublicKey):
        VerificationKey.from_bytes(bad)
    with pytest.raises(MalformedPublicKey):
        VerificationKey(VerificationKeyBytes(bad))


@pytest.mark.parametrize("size", [0, 31, 33, 64])
def test_wrong_lengths(size):
    with pytest.raises(InvalidSliceLength):
        SigningKey.from_bytes(bytes(size))
    with pytest.raises(InvalidSliceLength):
        VerificationKey.from_bytes(bytes(size))
    with pytest.raises(InvalidSliceLength):
        VerificationKeyBytes.from_bytes(bytes(size))


def test_non_canonical_key_encoding_is_accepted_and_kept():
    vk = VerificationKey.from_bytes(IDENTITY_NONCANONICAL_SIGN)
    assert vk.to_bytes() == IDENTITY_NONCANONICAL_SIGN


def test_small_order_signature_is_valid_under_zip215():
    vk = VerificationKey.from_bytes(IDENTITY_ENCODING)
    sig = Signature(IDENTITY_ENCODING, bytes(32))
    assert vk.verify(sig, b"Zcash") is None


def test_generate_with_callable_rng():
    sk = SigningKey.generate(lambda n: bytes(range(n)))
    assert sk.to_bytes() == bytes(range(32))


def test_generate_with_random_instance_is_deterministic():
    a = SigningKey.generate(random.Random(7))
    b = SigningKey.generate(random.Random(7))
    assert a == b
    assert a.verification_key() == b.verification_key()


def test_generate_rejects_bad_rng():
    with pytest.raises(TypeError):
        SigningKey.generate(42)


def test_ordering_and_hash_follow_encoding():
    keys = [SigningKey.generate(random.Random(i)).verification_key() for i in range(4)]
    assert [k.to_bytes() for k in sorted(keys)] == sorted(k.to_bytes() for k in keys)
    dup = VerificationKey.from_bytes(keys[0].to_bytes())
    assert dup == keys[0]
    assert len({keys[0], dup}) == 1


def test_verification_key_accepts_key_bytes():
    sk = SigningKey.generate(random.Random(3))
    vk = VerificationKey.from_bytes(sk.verification_key_bytes())
    assert vk == sk.verification_key()


@settings(max_examples=10, deadline=None)
@given(seed=st.binary(min_size=32, max_size=32), msg=st.binary(max_size=64))
def test_sign_verify_property(seed, msg):
    sk = SigningKey.from_bytes(seed)
    sig = sk.sign(msg)
    assert sig == sk.sign(msg)
    assert VerificationKey.from_bytes(sk.verification_key_bytes().to_bytes()).verify(sig, msg) is None