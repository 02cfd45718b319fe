"""异常处理模块"""


class KuTransError(Exception):
    """翻译客户端基础异常类"""
    pass


class ConfigurationError(KuTransError):
    """配置错误（例如缺少 API 密钥）"""
    pass


class ServiceError(KuTransError):
    """翻译服务调用错误"""
    pass


class ValidationError(KuTransError):
    """输入验证错误"""
    pass
