"""ActiveForm 核心层(异常等共享定义)."""
