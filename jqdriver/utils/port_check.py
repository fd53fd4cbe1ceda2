import socket

class PortChecker:
    @staticmethod
    def is_port_open(port: int, host: str = '127.0.0.1', timeout: float = 0.5) -> bool:
        """纯 Socket 检测浏览器调试端口是否开启"""
        with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as s:
            s.settimeout(timeout)
            return s.connect_ex((host, port)) == 0

    @staticmethod
    def split_addr(addr: str) -> tuple:
        """
        拆分调试地址

        Args:
            addr: 形如 '127.0.0.1:9222' 的地址

        Returns:
            (host, port)

        Raises:
            ValueError: 地址格式不正确
        """
        host, _, port = addr.rpartition(':')
        if not host or not port.isdigit():
            raise ValueError(f"无效的调试地址: {addr}")
        return host, int(port)
