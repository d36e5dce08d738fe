import hashlib

from rest_framework.throttling import SimpleRateThrottle


def _email_key(request):
    data = request.data if isinstance(request.data, dict) else {}
    email = str(data.get("email", "")).strip().lower()
    if not email:
        return "no-email"
    return hashlib.sha256(email.encode()).hexdigest()[:16]


class LoginRateThrottle(SimpleRateThrottle):
    scope = "login"

    def get_cache_key(self, request, view):
        return f"throttle:login:{self.get_ident(request)}:{_email_key(request)}"


class FirstTimeLoginRateThrottle(SimpleRateThrottle):
    scope = "first_time_login"

    def get_cache_key(self, request, view):
        return f"throttle:first_login:{self.get_ident(request)}:{_email_key(request)}"
