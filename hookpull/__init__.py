"""hookpull - 从远程注册表拉取 hook 及其依赖到本地项目"""

__version__ = "0.1.0"
