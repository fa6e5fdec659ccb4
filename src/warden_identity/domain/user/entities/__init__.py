from warden_identity.domain.user.entities.credential import Credential

__all__ = ["Credential"]
