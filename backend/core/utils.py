"""Audit trail helpers"""
import logging

from .models import AuditLog

logger = logging.getLogger('backend.core')


def get_client_ip(request):
    """First address in X-Forwarded-For, else REMOTE_ADDR"""
    if request is None:
        return None
    forwarded = request.META.get('HTTP_X_FORWARDED_FOR')
    if forwarded:
        return forwarded.split(',')[0].strip() or None
    return request.META.get('REMOTE_ADDR') or None


def create_audit_log(action, instance, request=None, user=None, changes=None,
                     object_name=None, object_reference=None):
    """
    Record an AuditLog row for a change to ``instance``.

    The acting user is ``user`` when given, otherwise ``request.user``.
    Anonymous users are stored as NULL. Failures are logged and return None
    so the write that triggered the entry still succeeds.
    """
    if not action or instance is None or instance.pk is None:
        logger.warning(f"Audit log skipped: action={action}, instance={instance!r}")
        return None

    actor = user or getattr(request, 'user', None)
    if actor is not None and not actor.is_authenticated:
        actor = None

    try:
        return AuditLog.objects.create(
            user=actor,
            action=action,
            model_name=instance._meta.object_name,
            object_id=str(instance.pk),
            object_name=object_name,
            object_reference=object_reference,
            changes=changes or {},
            ip_address=get_client_ip(request),
        )
    except Exception as e:
        logger.error(f"Failed to write audit log for {instance._meta.object_name} {instance.pk}: {e}")
        return None


def is_admin_user(user):
    """Staff, superusers and members of the 'Admin' group"""
    if not user or not user.is_authenticated:
        return False
    return user.is_staff or user.is_superuser or user.groups.filter(name='Admin').exists()
