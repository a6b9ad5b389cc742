from rest_framework.response import Response
from rest_framework.pagination import PageNumberPagination
from rest_framework.views import exception_handler
from rest_framework.exceptions import APIException
from rest_framework import status


class StandardResponseMixin:
    """Mixin to provide standardized API responses"""

    @staticmethod
    def success_response(data=None, message="Success", status_code=status.HTTP_200_OK, pagination=None):
        response_data = {
            "success": True,
            "message": message,
            "data": data
        }
        if pagination:
            response_data["pagination"] = pagination
        return Response(response_data, status=status_code)

    @staticmethod
    def error_response(message="Error", errors=None, status_code=status.HTTP_400_BAD_REQUEST):
        response_data = {
            "success": False,
            "message": message
        }
        if errors:
            response_data["errors"] = errors
        return Response(response_data, status=status_code)


class CustomPagination(PageNumberPagination):
    page_size = 12
    page_size_query_param = 'per_page'
    max_page_size = 100

    def get_paginated_response(self, data):
        return Response({
            'success': True,
            'message': 'Data retrieved successfully.',
            'data': data,
            'pagination': {
                'current_page': self.page.number,
                'total_pages': self.page.paginator.num_pages,
                'per_page': self.get_page_size(self.request),
                'total': self.page.paginator.count,
                'next_page_url': self.get_next_link(),
                'prev_page_url': self.get_previous_link()
            }
        })


def custom_exception_handler(exc, context):
    response = exception_handler(exc, context)

    if response is not None:
        error_message = "An error occurred"
        error_details = {}

        if hasattr(exc, 'detail'):
            if isinstance(exc.detail, dict):
                error_details = exc.detail
                error_message = "Validation error."
            elif isinstance(exc.detail, list):
                error_details = {"detail": exc.detail}
                error_message = "Validation error."
            else:
                error_message = str(exc.detail)

        if response.status_code == 404:
            error_message = "Resource not found."
        elif response.status_code == 401:
            error_message = "Authentication required."
        elif response.status_code == 403:
            error_message = "Permission denied."
        elif response.status_code == 500:
            error_message = "Internal server error."

        custom_response = {
            'success': False,
            'message': error_message
        }

        if error_details:
            custom_response['errors'] = error_details

        response.data = custom_response

    return response


def normalize_choice(value):
    """Lower-case an incoming enum value; blank and 'all' mean no filter."""
    if value is None:
        return None
    value = str(value).strip().lower()
    if not value or value == 'all':
        return None
    return value


class ExternalServiceError(APIException):
    """A third-party provider (video rooms, calendar) failed or was unreachable"""
    status_code = status.HTTP_502_BAD_GATEWAY
    default_detail = "External service request failed."
    default_code = 'external_service_error'
