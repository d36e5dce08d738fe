"""
Standard JSON renderer that wraps all DRF responses in one envelope.

Success:  {"success": true,  "data": ..., "message": "OK"}
Error:    {"success": false, "error": {"code": ..., "message": ..., "details": ...}}

Responses built with ``apps.core.response`` helpers or by the exception
handler are already wrapped and pass through unchanged.
"""

from rest_framework.renderers import JSONRenderer

_METHOD_MESSAGES = {
    'POST': 'Created successfully.',
    'PUT': 'Updated successfully.',
    'PATCH': 'Updated successfully.',
    'DELETE': 'Deleted successfully.',
}


class StandardJSONRenderer(JSONRenderer):
    """Wraps raw DRF payloads (generic list views, DRF errors) in the envelope."""

    def render(self, data, accepted_media_type=None, renderer_context=None):
        renderer_context = renderer_context or {}
        response = renderer_context.get('response')
        request = renderer_context.get('request')

        if isinstance(data, dict) and 'success' in data:
            pass
        elif response is not None and response.status_code >= 400:
            data = {
                'success': False,
                'error': {
                    'code': response.status_code,
                    'message': self._extract_message(data),
                    'details': data if isinstance(data, dict) else {'detail': data},
                },
            }
        else:
            method = getattr(request, 'method', 'GET')
            data = {
                'success': True,
                'data': data,
                'message': _METHOD_MESSAGES.get(method, 'OK'),
            }

        return super().render(data, accepted_media_type, renderer_context)

    @staticmethod
    def _extract_message(data):
        if isinstance(data, dict):
            return str(data.get('detail', data.get('message', 'Error')))
        if isinstance(data, list) and data:
            return str(data[0])
        return str(data) if data else 'Error'
