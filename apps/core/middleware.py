from .logging import REQUEST_ID_HEADER, new_correlation_id, set_correlation_id


_META_KEY = 'HTTP_' + REQUEST_ID_HEADER.upper().replace('-', '_')


class CorrelationIdMiddleware:
    """
    Tags each request with an id that log records and audit rows carry.

    A client-supplied ``X-Request-ID`` is reused when present; the id is
    echoed back on the response either way.
    """

    def __init__(self, get_response):
        self.get_response = get_response

    def __call__(self, request):
        request_id = (request.META.get(_META_KEY) or '').strip()[:100] or new_correlation_id()
        request.request_id = request_id
        set_correlation_id(request_id)
        try:
            response = self.get_response(request)
        finally:
            set_correlation_id(None)
        response[REQUEST_ID_HEADER] = request_id
        return response
