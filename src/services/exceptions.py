# src/services/exceptions.py

# --- Not Found Exceptions ---
class ProjectNotFoundError(Exception):
    """프로젝트를 찾을 수 없을 때"""
    pass

class CustomerNotFoundError(Exception):
    """고객을 찾을 수 없을 때"""
    pass

class GroupNotFoundError(Exception):
    """Keycloak 그룹을 찾을 수 없을 때"""
    pass

class IdentityUserNotFoundError(Exception):
    """Keycloak 사용자를 찾을 수 없을 때"""
    pass

# --- Validation Exceptions ---
class ValidationError(ValueError):
    """입력 값이 유효하지 않을 때"""
    pass

class PatchEmptyError(ValidationError):
    """수정 요청(patch)에 필드가 하나도 없을 때"""
    pass

# --- Auth Exceptions ---
class UnauthorizedError(Exception):
    """호출자에게 요청한 작업에 대한 권한이 없을 때"""
    pass

# --- Collaborator Exceptions ---
class CollaboratorError(Exception):
    """외부 시스템 호출이 치명적으로 실패하여 작업을 중단해야 할 때"""
    pass

class ProjectOperationError(CollaboratorError):
    """데이터베이스의 프로젝트 행 생성/수정/삭제 실패 시"""
    pass

class GroupOperationError(CollaboratorError):
    """Keycloak 그룹 또는 멤버십 작업 실패 시 (중복 생성 제외)"""
    pass

class RoleOperationError(CollaboratorError):
    """SearchGuard 역할 생성/삭제 실패 시"""
    pass
