# rota_reader/core - Errors, response DTOs and the service boundary
