"""Device registry — registration, deactivation and token lookup for push."""

import structlog
from courier.device.device import DeviceToken, DeviceType
from protean.utils.globals import current_domain

logger = structlog.get_logger(__name__)


class DeviceRegistry:
    """Repository-backed access to device tokens.

    The push sender only calls ``active_tokens``; a failed send never
    deactivates a device.
    """

    def _repo(self):
        return current_domain.repository_for(DeviceToken)

    def devices_for(self, recipient_id, active_only=False):
        filters = {"recipient_id": str(recipient_id)}
        if active_only:
            filters["is_active"] = True
        return self._repo()._dao.query.filter(**filters).order_by("created_at").limit(None).all().items

    def active_tokens(self, recipient_id) -> list[str]:
        return [device.push_token for device in self.devices_for(recipient_id, active_only=True)]

    def register(self, recipient_id, push_token, device_type=DeviceType.MOBILE.value):
        """Register ``push_token``, reactivating it when already known."""
        repo = self._repo()
        for device in self.devices_for(recipient_id):
            if device.push_token == push_token:
                device.reactivate()
                repo.add(device)
                logger.info("device_reactivated", device_id=str(device.id), recipient_id=str(recipient_id))
                return repo.get(device.id)

        device = DeviceToken.register(recipient_id, push_token, device_type)
        repo.add(device)
        logger.info(
            "device_registered",
            device_id=str(device.id),
            recipient_id=str(recipient_id),
            device_type=device_type,
        )
        return repo.get(device.id)

    def deactivate(self, device_id):
        repo = self._repo()
        device = repo.get(device_id)
        device.deactivate()
        repo.add(device)
        logger.info("device_deactivated", device_id=str(device_id), recipient_id=str(device.recipient_id))
        return repo.get(device_id)
