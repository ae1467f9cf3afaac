import hashlib
import hmac
import logging

from photodesk.errors import AuthError

logger = logging.getLogger(__name__)

AUTH_HEADER = "X-Auth-Token"


def hash_secret(secret):
    return hashlib.sha256(secret.encode("utf-8")).hexdigest()


def check_token(token, admin_hash):
    """Accept either the raw shared secret or its SHA-256 hex digest."""
    if not token or not admin_hash:
        return False
    expected = admin_hash.strip().lower().encode("utf-8")
    hashed_ok = hmac.compare_digest(hash_secret(token).encode("utf-8"), expected)
    # Token is already the digest (pre-hashed client)
    direct_ok = hmac.compare_digest(token.strip().lower().encode("utf-8"), expected)
    return hashed_ok or direct_ok


def require_auth(request, config):
    token = request.headers.get(AUTH_HEADER, "")
    if not check_token(token, config.admin_hash):
        logger.warning("Rejected %s %s from %s", request.method, request.args.get("action", ""), request.remote_addr)
        raise AuthError()
