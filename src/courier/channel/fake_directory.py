"""In-memory recipient directory for tests and local runs."""

from courier.channel.directory_port import RecipientDirectory


class InMemoryRecipientDirectory(RecipientDirectory):
    def __init__(self):
        self.emails: dict[str, str] = {}
        self.phones: dict[str, str] = {}

    def add(self, recipient_id, email: str | None = None, phone: str | None = None):
        if email:
            self.emails[str(recipient_id)] = email
        if phone:
            self.phones[str(recipient_id)] = phone

    def email_for(self, recipient_id) -> str | None:
        return self.emails.get(str(recipient_id))

    def phone_for(self, recipient_id) -> str | None:
        return self.phones.get(str(recipient_id))

    def reset(self):
        self.emails.clear()
        self.phones.clear()
