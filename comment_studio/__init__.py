"""
Comment Studio - 文档注释分析工具

定位、解析、重排 XML 文档注释，并识别注释中的 LINK 引用与 TODO 类标签。
"""

__version__ = "0.1.0"
