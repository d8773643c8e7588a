"""
In-memory stand-ins for the MongoDB repositories and the image store.
"""

import copy
from typing import Any, Dict, Iterable, List, Optional, Tuple

from bson import ObjectId

from app.core.exceptions import EmailAlreadyRegisteredError, ImageDeleteError, ImageUploadError
from app.domain.models.preferences import PreferencesModel
from app.domain.models.user import UserModel
from app.infrastructure.cloudinary import UploadedImage


def _set_path(document: Dict[str, Any], path: str, value: Any) -> None:
    *parents, leaf = path.split(".")
    for key in parents:
        document = document.setdefault(key, {})
    document[leaf] = copy.deepcopy(value)


def _unset_path(document: Dict[str, Any], path: str) -> None:
    *parents, leaf = path.split(".")
    for key in parents:
        document = document.get(key, {})
    document.pop(leaf, None)


class FakeUserRepository:
    """Stores user documents the way they would be laid out in MongoDB."""

    def __init__(self):
        self.documents: Dict[str, Dict[str, Any]] = {}
        self.updates: List[Tuple[str, Dict[str, Any], List[str]]] = []
        self.deleted: List[str] = []

    def add(self, user: UserModel) -> UserModel:
        user_id = str(ObjectId())
        document = user.to_document()
        document["_id"] = user_id
        self.documents[user_id] = document
        return UserModel.from_document(copy.deepcopy(document))

    def stored(self, user_id: str) -> Dict[str, Any]:
        return self.documents[user_id]

    async def create_user(self, user: UserModel) -> UserModel:
        if any(doc["email"] == user.email for doc in self.documents.values()):
            raise EmailAlreadyRegisteredError(user.email)
        return self.add(user)

    async def get_user_by_id(self, user_id: str) -> Optional[UserModel]:
        document = self.documents.get(user_id)
        return UserModel.from_document(copy.deepcopy(document)) if document else None

    async def get_user_by_email(self, email: str) -> Optional[UserModel]:
        for document in self.documents.values():
            if document["email"] == email:
                return UserModel.from_document(copy.deepcopy(document))
        return None

    async def update_user(
        self, user_id: str, set_fields: Dict[str, Any], unset_fields: Iterable[str] = ()
    ) -> bool:
        unset_fields = list(unset_fields)
        self.updates.append((user_id, dict(set_fields), unset_fields))
        document = self.documents.get(user_id)
        if document is None:
            return False
        for path, value in set_fields.items():
            _set_path(document, path, value)
        for path in unset_fields:
            _unset_path(document, path)
        return True

    async def delete_user(self, user_id: str) -> bool:
        self.deleted.append(user_id)
        return self.documents.pop(user_id, None) is not None


class FakePreferencesRepository:
    """Stores preferences documents keyed by user ID."""

    def __init__(self):
        self.documents: Dict[str, Dict[str, Any]] = {}
        self.fail_on_create: Optional[Exception] = None

    async def create_preferences(self, preferences: PreferencesModel) -> PreferencesModel:
        if self.fail_on_create:
            raise self.fail_on_create
        document = preferences.to_document()
        document["_id"] = str(ObjectId())
        self.documents[preferences.user_id] = document
        return PreferencesModel.from_document(copy.deepcopy(document))

    async def get_preferences(self, user_id: str) -> Optional[PreferencesModel]:
        document = self.documents.get(user_id)
        return PreferencesModel.from_document(copy.deepcopy(document)) if document else None

    async def update_preferences(self, user_id: str, set_fields: Dict[str, Any]) -> bool:
        document = self.documents.get(user_id)
        if document is None:
            return False
        document.update(copy.deepcopy(set_fields))
        return True


class FakeImageStore:
    """Records calls in order; uploads return sequential public IDs."""

    def __init__(self):
        self.calls: List[Tuple[str, str]] = []
        self.fail_upload = False
        self.fail_delete = False

    async def upload_image(
        self, content: bytes, filename: str = "avatar", content_type: str = "application/octet-stream"
    ) -> UploadedImage:
        self.calls.append(("upload", filename))
        if self.fail_upload:
            raise ImageUploadError(details={"status_code": 500})
        public_id = f"avatars/img-{len(self.calls)}"
        return UploadedImage(
            secure_url=f"https://res.cloudinary.com/demo/image/upload/{public_id}.png",
            public_id=public_id,
        )

    async def delete_image(self, public_id: str) -> None:
        self.calls.append(("delete", public_id))
        if self.fail_delete:
            raise ImageDeleteError(public_id)
