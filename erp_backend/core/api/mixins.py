# core/api/mixins.py

"""
ENVELOPE VIEW MIXIN

Wraps every successful DRF response that is not already enveloped,
so stock ModelViewSet actions (retrieve/create/update) share the
{success, data} shape with the paginated list and custom actions.
"""

from rest_framework.response import Response

from core.api.responses import envelope, is_enveloped


class EnvelopeResponseMixin:
    def finalize_response(self, request, response, *args, **kwargs):
        if (
            isinstance(response, Response)
            and response.status_code < 400
            and response.status_code != 204
            and not is_enveloped(response.data)
        ):
            response.data = {"success": True, "data": response.data}
        return super().finalize_response(request, response, *args, **kwargs)


class SoftDeleteMixin:
    """
    Master data is never hard-deleted.

    DELETE flips `soft_delete_field` to `soft_delete_value`
    (is_active=False by default; employees -> terminated, equipment -> retired).
    """

    soft_delete_field = "is_active"
    soft_delete_value = False

    def destroy(self, request, *args, **kwargs):
        instance = self.get_object()
        self.perform_soft_delete(instance)
        return envelope(
            self.get_serializer(instance).data,
            message=f"{instance._meta.verbose_name.title()} deactivated",
        )

    def perform_soft_delete(self, instance):
        setattr(instance, self.soft_delete_field, self.soft_delete_value)
        update_fields = [self.soft_delete_field]
        if any(f.name == "updated_at" for f in instance._meta.concrete_fields):
            update_fields.append("updated_at")
        instance.save(update_fields=update_fields)
