"""Resource types and request builders: regions, sizes, snapshots, SSH keys, tags, volumes and load balancers."""