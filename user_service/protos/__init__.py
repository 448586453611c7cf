import grpc

# Стабы генерируются из .proto при импорте (нужен grpcio-tools).
# Путь должен разрешаться относительно одного из элементов sys.path.
user_service_pb2, user_service_pb2_grpc = grpc.protos_and_services(
    "user_service/protos/user_service.proto"
)
