"""checkver - 第三方依赖版本新鲜度审计工具"""

__version__ = "1.0.0"
