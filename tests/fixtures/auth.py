"""Identity headers as set by the upstream auth gateway."""

USER_HEADERS = {"X-User-ID": "user-1", "X-User-Roles": "user"}
OTHER_USER_HEADERS = {"X-User-ID": "user-2", "X-User-Roles": "user"}
ADMIN_HEADERS = {"X-User-ID": "admin-1", "X-User-Roles": "user,admin"}
