from logplane import lifecycle_factory


def main():
    # Simulated control plane: creates take 120ms to become visible
    logs = lifecycle_factory(
        "memory",
        {"visibility_delay": 0.12},
        {"retry_interval": 0.05},
    )

    stream = logs.create_log_stream("/example/app", "instance-1", timeout=0.5)
    print(f"Created: {stream}")
    print(f"Groups: {[g.name for g in logs.describe_log_groups('/example')]}")
    print(f"Deleted: {logs.delete_log_group('/example/app', timeout=0.5)}")

if __name__ == "__main__":
    main()
