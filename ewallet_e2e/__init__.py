"""e-wallet 后台端到端测试套件。"""
