"""
命令行前端
"""
