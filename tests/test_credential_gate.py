"""
Credential Gate Unit Tests

Tests cover:
  - Header codec: encode / decode / split on first space and first colon
  - Gate decisions for every deny reason and the allow path
  - Challenge header policy on allow and deny
  - Request view construction from header mappings
"""

import base64

import pytest

from admin_panel.services.credential_gate import (
    AdminIdentity,
    Allow,
    Credentials,
    Deny,
    DenyReason,
    MalformedTokenError,
    RequestView,
    decode_basic_token,
    encode_basic_credentials,
    evaluate,
    split_authorization,
)

CHALLENGE = ("WWW-Authenticate", "Basic")
ALADDIN_HEADER = "Basic QWxhZGRpbjpvcGVuIHNlc2FtZQ=="


def _b64(text):
    return base64.b64encode(text.encode("utf-8")).decode("ascii")


# ═══════════════════════════════════════════════════════════════
# BLOCK 1: Header codec
# ═══════════════════════════════════════════════════════════════

class TestCodec:
    def test_encode_known_value(self):
        assert encode_basic_credentials("Aladdin", "open sesame") == ALADDIN_HEADER

    def test_encode_rejects_colon_in_username(self):
        with pytest.raises(ValueError):
            encode_basic_credentials("ad:min", "secret")

    @pytest.mark.parametrize("username,password", [
        ("admin", "admin password"),
        ("Aladdin", "open sesame"),
        ("user", ""),
        ("", "only-password"),
        ("root", "pa:ss:word"),
        ("jürgen", "pässwörd ✓"),
    ])
    def test_round_trip(self, username, password):
        scheme, token = split_authorization(encode_basic_credentials(username, password))
        assert scheme == "Basic"
        assert decode_basic_token(token) == Credentials(username, password)

    def test_only_first_colon_splits(self):
        creds = decode_basic_token(_b64("admin:pa:ss"))
        assert creds.username == "admin"
        assert creds.password == "pa:ss"

    def test_no_colon_means_no_password(self):
        creds = decode_basic_token(_b64("justaname"))
        assert creds.username == "justaname"
        assert creds.password is None

    @pytest.mark.parametrize("token", [
        None,
        "not base64!",
        "QWxhZGRpbg",          # missing padding
        "QWxh ZGRpbg==",
        base64.b64encode(b"\xff\xfe:\xfd").decode("ascii"),  # not UTF-8
    ])
    def test_malformed_tokens(self, token):
        with pytest.raises(MalformedTokenError):
            decode_basic_token(token)

    def test_split_on_first_space_only(self):
        assert split_authorization("Basic abc def") == ("Basic", "abc def")

    def test_split_without_space(self):
        assert split_authorization("Basic") == ("Basic", None)

    def test_credentials_repr_hides_password(self):
        assert "hunter2" not in repr(Credentials("admin", "hunter2"))

    def test_identity_repr_hides_password(self):
        assert "hunter2" not in repr(AdminIdentity("admin", "hunter2"))


# ═══════════════════════════════════════════════════════════════
# BLOCK 2: Gate decisions
# ═══════════════════════════════════════════════════════════════

class TestEvaluate:
    def test_missing_header(self, identity):
        result = evaluate(RequestView(), identity)
        assert result.decision == Deny(DenyReason.MISSING_HEADER)
        assert CHALLENGE in result.response_headers

    def test_empty_header_counts_as_missing(self, identity):
        result = evaluate(RequestView(authorization=""), identity)
        assert result.reason is DenyReason.MISSING_HEADER

    def test_garbage_token(self, identity):
        result = evaluate(RequestView(authorization="Basic %%%garbage%%%"), identity)
        assert not result.allowed
        assert result.reason is DenyReason.MALFORMED_TOKEN

    def test_scheme_without_token(self, identity):
        result = evaluate(RequestView(authorization="Basic"), identity)
        assert result.reason is DenyReason.MALFORMED_TOKEN

    def test_digest_scheme(self, identity):
        result = evaluate(RequestView(authorization="Digest abcd"), identity)
        assert result.reason is DenyReason.UNSUPPORTED_SCHEME

    @pytest.mark.parametrize("scheme", ["basic", "BASIC", "Bearer"])
    def test_scheme_is_case_sensitive(self, identity, scheme):
        header = f"{scheme} {_b64('admin:admin password')}"
        result = evaluate(RequestView(authorization=header), identity)
        assert result.reason is DenyReason.UNSUPPORTED_SCHEME

    def test_aladdin_allowed(self):
        result = evaluate(
            RequestView(authorization=ALADDIN_HEADER),
            AdminIdentity("Aladdin", "open sesame"),
        )
        assert result.allowed
        assert result.decision == Allow("Aladdin")
        assert result.reason is None

    def test_aladdin_rejected_for_admin_identity(self, identity):
        result = evaluate(RequestView(authorization=ALADDIN_HEADER), identity)
        assert result.decision == Deny(DenyReason.BAD_CREDENTIALS)
        assert CHALLENGE in result.response_headers

    def test_wrong_password(self, identity):
        header = encode_basic_credentials("admin", "wrong")
        assert evaluate(RequestView(authorization=header), identity).reason is DenyReason.BAD_CREDENTIALS

    def test_wrong_username(self, identity):
        header = encode_basic_credentials("root", "admin password")
        assert evaluate(RequestView(authorization=header), identity).reason is DenyReason.BAD_CREDENTIALS

    def test_missing_password_never_matches(self, identity):
        header = f"Basic {_b64('admin')}"
        assert evaluate(RequestView(authorization=header), identity).reason is DenyReason.BAD_CREDENTIALS

    def test_empty_token_is_bad_credentials(self, identity):
        assert evaluate(RequestView(authorization="Basic "), identity).reason is DenyReason.BAD_CREDENTIALS

    def test_password_with_colon(self):
        identity = AdminIdentity("admin", "pa:ss")
        header = f"Basic {_b64('admin:pa:ss')}"
        assert evaluate(RequestView(authorization=header), identity).allowed

    def test_password_prefix_does_not_match(self):
        identity = AdminIdentity("admin", "pa:ss")
        header = f"Basic {_b64('admin:pa')}"
        assert not evaluate(RequestView(authorization=header), identity).allowed

    def test_evaluation_is_idempotent(self, identity):
        view = RequestView(authorization=encode_basic_credentials("admin", "admin password"))
        assert evaluate(view, identity) == evaluate(view, identity)


# ═══════════════════════════════════════════════════════════════
# BLOCK 3: Challenge header policy
# ═══════════════════════════════════════════════════════════════

class TestChallengePolicy:
    def test_allow_carries_challenge_by_default(self, identity):
        view = RequestView(authorization=encode_basic_credentials("admin", "admin password"))
        assert evaluate(view, identity).response_headers == (CHALLENGE,)

    def test_allow_without_challenge_when_disabled(self, identity):
        view = RequestView(authorization=encode_basic_credentials("admin", "admin password"))
        result = evaluate(view, identity, challenge_on_allow=False)
        assert result.allowed
        assert result.response_headers == ()

    def test_deny_always_carries_challenge(self, identity):
        result = evaluate(RequestView(), identity, challenge_on_allow=False)
        assert result.response_headers == (CHALLENGE,)


# ═══════════════════════════════════════════════════════════════
# BLOCK 4: Request view
# ═══════════════════════════════════════════════════════════════

class TestRequestView:
    def test_from_plain_dict_is_case_insensitive(self):
        view = RequestView.from_headers({"authorization": "Basic abc"})
        assert view.authorization == "Basic abc"

    def test_from_headers_without_authorization(self):
        assert RequestView.from_headers({"Accept": "*/*"}).authorization is None

    def test_view_is_immutable(self):
        view = RequestView(authorization="Basic abc")
        with pytest.raises(AttributeError):
            view.authorization = "Digest x"
