class DomainError(Exception):
    """Lỗi nghiệp vụ. ``http_status`` là mã trả về khi lỗi đi ra tới API."""

    http_status = 400


class ValidationError(DomainError):
    """Dữ liệu nhập sai: số âm, tỷ trọng > 100, tháng sai định dạng..."""


class AuthenticationError(DomainError):
    http_status = 401


class AuthorizationError(DomainError):
    """Chỉ Admin được sửa cấu trúc chỉ tiêu và lưu phiếu đánh giá."""

    http_status = 403


class NotFoundError(DomainError):
    """Tháng chỉ tiêu, nhóm, chỉ tiêu, phiếu đánh giá hoặc nhân viên không tồn tại."""

    http_status = 404
