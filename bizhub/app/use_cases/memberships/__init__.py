from .change_role_use_case import ChangeRoleUseCase
from .get_effective_role_use_case import GetEffectiveRoleUseCase
from .invite_member_use_case import InviteMemberUseCase
from .list_members_use_case import ListMembersUseCase
from .remove_member_use_case import RemoveMemberUseCase
from .update_permissions_use_case import UpdatePermissionsUseCase

__all__ = [
    "ChangeRoleUseCase",
    "GetEffectiveRoleUseCase",
    "InviteMemberUseCase",
    "ListMembersUseCase",
    "RemoveMemberUseCase",
    "UpdatePermissionsUseCase",
]
