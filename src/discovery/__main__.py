import sys

from src.discovery.build import write_site_files

# python -m src.discovery [output_dir]
if __name__ == "__main__":
    output_dir = sys.argv[1] if len(sys.argv) > 1 else "artifacts/site"
    result = write_site_files(output_dir=output_dir)
    print(result)
