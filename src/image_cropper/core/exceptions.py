"""项目内使用的自定义异常定义。"""


class ImageCropperError(Exception):
    """基础异常类型。"""


class InvalidConfigurationError(ImageCropperError):
    """配置不合法时抛出，属于致命错误，整批任务不会开始处理。"""


class InvalidSizeFormat(InvalidConfigurationError):
    """尺寸字符串不是 WxH 形式的正整数。"""


class DirectoryNotFound(InvalidConfigurationError):
    """输入目录不存在或不可读。"""


class FileProcessingError(ImageCropperError):
    """单个文件处理失败，只影响当前文件。"""
