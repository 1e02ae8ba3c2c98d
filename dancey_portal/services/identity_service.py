"""
Firebase Authentication and Firestore access.

Instructors get an auth account whose uid is their database id; app users
live in the Firestore `users` collection and are only listed and
enabled/disabled from the portal.
"""
import json
import logging
from typing import Dict, List, Optional, Tuple

import firebase_admin
from firebase_admin import auth as firebase_auth
from firebase_admin import credentials, firestore
from firebase_admin.exceptions import FirebaseError
from google.api_core.exceptions import GoogleAPICallError

from dancey_portal.config import FIREBASE_PROJECT_ID, FIREBASE_SERVICE_ACCOUNT
from dancey_portal.exceptions import ConflictError, ExternalServiceError, NotFoundError

logger = logging.getLogger(__name__)

APP_USER_ROLE = "app user"


def initialize_firebase():
    """Return the default Firebase app, initialising it on first call."""
    try:
        return firebase_admin.get_app()
    except ValueError:
        pass

    options = {"projectId": FIREBASE_PROJECT_ID} if FIREBASE_PROJECT_ID else None
    if FIREBASE_SERVICE_ACCOUNT:
        cred = credentials.Certificate(json.loads(FIREBASE_SERVICE_ACCOUNT))
        app = firebase_admin.initialize_app(cred, options)
        logger.info("Firebase Admin initialized with service account")
    else:
        app = firebase_admin.initialize_app(credentials.ApplicationDefault(), options)
        logger.info("Firebase Admin initialized with default credentials")
    return app


class FirebaseIdentityService:
    def __init__(self):
        self._app = None

    @property
    def app(self):
        if self._app is None:
            self._app = initialize_firebase()
        return self._app

    # ----- AUTH ACCOUNTS -----

    def create_identity(
        self,
        uid: str,
        email: str,
        password: str,
        display_name: str,
        photo_url: Optional[str] = None,
    ):
        kwargs = {"uid": uid, "email": email, "password": password, "display_name": display_name}
        if photo_url:
            kwargs["photo_url"] = photo_url
        try:
            return firebase_auth.create_user(app=self.app, **kwargs)
        except firebase_auth.EmailAlreadyExistsError:
            raise ConflictError("An account with this email already exists", field="email")
        except FirebaseError as e:
            logger.error("Firebase create_user failed for %s: %s", email, e, exc_info=True)
            raise ExternalServiceError("Failed to create identity account")

    def set_claims(self, uid: str, claims: Dict) -> None:
        try:
            firebase_auth.set_custom_user_claims(uid, claims, app=self.app)
        except FirebaseError as e:
            logger.error("Firebase set_custom_user_claims failed for %s: %s", uid, e, exc_info=True)
            raise ExternalServiceError("Failed to set account claims")

    def disable_identity(self, uid: str, disabled: bool) -> None:
        try:
            firebase_auth.update_user(uid, disabled=disabled, app=self.app)
        except firebase_auth.UserNotFoundError:
            raise NotFoundError("Identity account not found")
        except FirebaseError as e:
            logger.error("Firebase update_user failed for %s: %s", uid, e, exc_info=True)
            raise ExternalServiceError("Failed to update identity account")

    def delete_identity(self, uid: str) -> None:
        try:
            firebase_auth.delete_user(uid, app=self.app)
        except FirebaseError as e:
            logger.error("Firebase delete_user failed for %s: %s", uid, e, exc_info=True)
            raise ExternalServiceError("Failed to delete identity account")

    def lookup_by_email(self, email: str):
        try:
            return firebase_auth.get_user_by_email(email, app=self.app)
        except firebase_auth.UserNotFoundError:
            return None
        except FirebaseError as e:
            logger.error("Firebase get_user_by_email failed for %s: %s", email, e, exc_info=True)
            raise ExternalServiceError("Failed to look up identity account")

    def delete_identity_by_email(self, email: str) -> bool:
        """Delete the account registered with `email`. False when there is none."""
        user = self.lookup_by_email(email)
        if user is None:
            logger.info("No identity account for %s, nothing to delete", email)
            return False
        self.delete_identity(user.uid)
        return True

    # ----- APP USERS (FIRESTORE) -----

    def list_app_users(self, page: int, limit: int, search: Optional[str] = None) -> Tuple[List[Dict], int]:
        try:
            docs = (
                firestore.client(app=self.app)
                .collection("users")
                .where("role", "==", APP_USER_ROLE)
                .stream()
            )
            users = [_app_user_from_doc(doc) for doc in docs]
        except (FirebaseError, GoogleAPICallError) as e:
            logger.error("Firestore query for app users failed: %s", e, exc_info=True)
            raise ExternalServiceError("Failed to load app users")

        if search and search.strip():
            term = search.strip().lower()
            users = [
                u for u in users
                if term in (u.get("name") or "").lower() or term in (u.get("email") or "").lower()
            ]
        total = len(users)
        start = (page - 1) * limit
        return users[start:start + limit], total

    def set_app_user_status(self, uid: str, status: str) -> None:
        disabled = status == "inactive"
        self.disable_identity(uid, disabled)
        try:
            firestore.client(app=self.app).collection("users").document(uid).update({
                "status": status,
                "disabled": disabled,
                "updatedAt": firestore.SERVER_TIMESTAMP,
            })
        except (FirebaseError, GoogleAPICallError) as e:
            logger.error("Firestore status update failed for %s: %s", uid, e, exc_info=True)
            raise ExternalServiceError("Failed to update app user")


def _app_user_from_doc(doc) -> Dict:
    data = doc.to_dict() or {}
    created_at = data.get("createdAt")
    return {
        "id": doc.id,
        "name": data.get("name") or data.get("displayName") or "",
        "email": data.get("email") or "",
        "phone_number": data.get("phoneNumber") or data.get("phone"),
        "status": data.get("status") or ("inactive" if data.get("disabled") else "active"),
        "created_at": created_at.isoformat() if hasattr(created_at, "isoformat") else created_at,
    }


identity_service = FirebaseIdentityService()
